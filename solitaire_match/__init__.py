"""Card-matching solitaire game: level loading, models, rules with undo, and pygame views."""

__version__ = "0.1.0"