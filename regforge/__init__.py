"""regforge

Plugin-driven framework that reads register-map descriptions into a verified
component tree for code generators.
"""

__version__ = "0.1.0"
