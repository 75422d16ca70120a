"""
meso-scheduler: training adaptation engine for strength training.

Maps calendar dates to mesocycle W<week>D<day> labels, decides load
progression from set performance and readiness, and builds warm-up ramps.
"""

__version__ = "0.1.0"
