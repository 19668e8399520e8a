"""paravault - file post screenshots into a PARA vault."""

__version__ = "0.1.0"
