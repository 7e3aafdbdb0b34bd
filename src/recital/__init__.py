"""
Recital: festival planning and key modulation.

Budget-constrained selection of festival events (three interchangeable
optimizers) and shortest modulation paths between musical keys.
"""

__version__ = "0.1.0"
