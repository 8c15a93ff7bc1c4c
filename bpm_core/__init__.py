"""Business process core: process definitions, steps and execution lifecycle."""

__version__ = "0.1.0"
