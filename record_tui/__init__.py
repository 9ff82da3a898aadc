"""Terminal browser and player for Radio Record stations"""

__version__ = "0.1.0"
