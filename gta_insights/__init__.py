"""
GTA Insights: urban-growth analytics and the Urbo assistant, backed by Gemini.
"""

__version__ = "1.0.0"
