"""
Description: Template-driven support ticket cards for chat channels.
Main features:
    - Normalize ticket additional properties
    - Compile and validate administrator field templates
    - Annotate and render dynamic fields into card element trees
"""

__version__ = "0.1.0"
