"""Static evaluation of CMake syntax trees into variables, options and targets."""

__version__ = "0.1.0"