"""
Trip Budget - Source Package

A small personal budgeting assistant for planning a trip:
itemized expenses on one side, a savings goal on the other.

DESIGN PRINCIPLES:
1. Validate first, persist second, mutate memory last
2. Fail early, fail visibly
3. No view concerns inside the stores
4. Every mutation is audited
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Trip Budget Team"
