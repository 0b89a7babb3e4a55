"""Wiki Mediator"""

__version__ = "1.0.0"
