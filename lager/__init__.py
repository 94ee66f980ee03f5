"""Unidirectional data-flow toolkit: stores, effects, reactive nodes, lenses and a tree debugger."""

__version__ = "0.1.0"