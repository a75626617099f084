"""Customer-facing message generation (Gemini)."""
