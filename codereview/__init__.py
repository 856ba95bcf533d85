"""AI-assisted code review service backed by Google Gemini."""
