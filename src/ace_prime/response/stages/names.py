"""Stage names used to wire the response pipeline."""

IDENTITY_RESOLUTION = "identity_resolution"
PERSONA_SELECTION = "persona_selection"
CONTEXT_AGGREGATION = "context_aggregation"
PROMPT_BUILDING = "prompt_building"
AI_INVOCATION = "ai_invocation"
