# simulations/__init__.py
"""
Monte Carlo simulations for the weighted-outcomes repo.

Run comparisons via:
    python -m simulations.compare --method-a random --method-b fair --weights A=1 B=3 --draws 100000
"""
