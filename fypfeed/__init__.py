"""For You feed ranking engine."""

__version__ = "0.1.0"
