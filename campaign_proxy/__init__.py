"""AI proxy for the campaign marketing frontend.

Forwards campaign-drafting prompts to the Gemini API and reshapes the model
output into JSON responses for the frontend.
"""

__version__ = "1.0.0"
