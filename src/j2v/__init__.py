"""Compile form-shaped parameters into JSON2Video request bodies."""

__version__ = "0.1.0"
