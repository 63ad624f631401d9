"""Generate stacks of environment images for evolutionary simulations."""

__version__ = "3.0.1"