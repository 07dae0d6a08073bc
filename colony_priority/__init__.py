"""colony-priority — situational work-priority scoring for colony simulations."""

__version__ = "0.1.0"
