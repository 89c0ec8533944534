"""I/O utilities for monotile."""

from .stl import read_stl, render, write_stl

__all__ = ['read_stl', 'render', 'write_stl']
