"""Constants used throughout the application."""

# Generative-language provider
DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MODEL = "gemini-2.0-flash"

# Network budget in seconds: initiating the request, then the whole transfer
CONNECT_TIMEOUT = 30.0
TRANSFER_TIMEOUT = 60.0

# Generation presets (wire names)
CHAT_GENERATION = {"temperature": 0.9, "topK": 40, "topP": 0.95, "maxOutputTokens": 2048}
IDEA_GENERATION = {"temperature": 0.8, "topK": 40, "topP": 0.95, "maxOutputTokens": 2048}
LIST_GENERATION = {"temperature": 0.7, "topK": 40, "topP": 0.9, "maxOutputTokens": 512}
STRUCTURED_GENERATION = {"temperature": 0.4, "topK": 32, "topP": 0.9, "maxOutputTokens": 1024}

# Context block limits
MAX_CONTEXT_CHARS = 2000
TOP_FEATURE_COUNT = 5
RECENT_CONVERSATION_COUNT = 3
RECENT_NOTE_COUNT = 3
CONVERSATION_RESPONSE_CHARS = 100
NOTE_CONTENT_CHARS = 50

# Idea generation
IDEAS_PER_REQUEST = 5
IDEA_DEFAULTS = {
    "description": "Explore this business opportunity",
    "category": "General",
    "difficulty": "Medium",
    "estimatedRevenueRange": "$10,000 - $50,000/year",
    "launchTimeframe": "3-6 months",
    "startupCostRange": "$1,000 - $5,000",
    "profitMarginRange": "30-50%",
    "marketDemand": "Medium",
    "competitionLevel": "Medium",
    "personalNote": "Great opportunity for growth",
}

# SWOT analysis
DEFAULT_VIABILITY_SCORE = 70
SWOT_DEFAULTS = {
    "strengths": ["Strong market fit", "Innovative approach"],
    "weaknesses": ["Needs market validation"],
    "opportunities": ["Growing market demand", "Digital transformation"],
    "threats": ["Competition"],
    "recommendations": ["Start with MVP", "Validate with customers", "Build audience"],
}

# Quiz steps
QUIZ_STEP_CATEGORIES = {1: "skills", 2: "personality", 3: "interests"}

# Daily goals
DAILY_GOAL_COUNT = 3

# Timeline generation
MAX_TIMELINE_STAGES = 6
DEFAULT_TIMELINE_STAGES = 6

# Brain dump to a single idea
BRAIN_DUMP_IDEA_DEFAULTS = {
    "title": "New Business Idea",
    "category": "General",
    "difficulty": "Medium",
    "estimatedRevenueRange": "$10K-$100K",
    "launchTimeframe": "3-6 months",
    "startupCostRange": "$1K-$10K",
    "profitMarginRange": "20-30%",
    "marketDemand": "Medium",
    "competitionLevel": "Medium",
}

# Assistant chat
CHAT_IDEA_LIMIT = 3
RECENT_PROGRESS_NOTES = 3
ASSISTANT_FALLBACK_REPLY = "I'm sorry, I encountered an error. Please try again."
PROGRESS_FALLBACK_REPLY = (
    "I'm here to help! Let's break down your question into actionable steps. "
    "What specific area would you like to focus on?"
)
