"""
Wrangling Demonstrations Package

Contains the demonstration operations as pure functions:
- extract: Dataset loading (remote sources or bundled samples)
- validate: Tidy-data checks and profiles
- reshape: Pivoting longer and wider
- join: Mutating and filtering joins
- factors: Reordering categorical levels
- strings: String manipulation and column splitting
- demos / report: The demonstrations and their rendered report
"""

__version__ = "1.0.0"
