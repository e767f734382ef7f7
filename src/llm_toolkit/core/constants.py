"""
Constantes globales pour LLM Toolkit.
"""

# ============================================================================
# CONFIGURATION PAR DÉFAUT
# ============================================================================
DEFAULT_PROVIDER = "openai"
DEFAULT_MODEL = "gpt-3.5-turbo"
DEFAULT_SYSTEM_PROMPT = "You are a helpful assistant."
DEFAULT_TOKEN_LIMIT = 18000
DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 1000

# ============================================================================
# TOKENS
# ============================================================================
AVERAGE_CHARS_PER_TOKEN = 4
TOKEN_WARNING_RATIO = 0.80  # Alerte à 80% de la limite

# ============================================================================
# PROVIDERS
# ============================================================================
DEFAULT_ENDPOINTS = {
    "openai": "https://api.openai.com/v1/chat/completions",
    "anthropic": "https://api.anthropic.com/v1/messages",
    "google": "https://generativelanguage.googleapis.com/v1beta/models/gemini-pro:generateContent",
    "custom": "",
}

ANTHROPIC_VERSION = "2023-06-01"

# Sentinelle de fin de stream SSE (OpenAI)
STREAM_DONE_SENTINEL = "[DONE]"
SSE_DATA_PREFIX = "data: "

# ============================================================================
# MESSAGES
# ============================================================================
VALID_ROLES = ("system", "user", "assistant")

# ============================================================================
# STOCKAGE
# ============================================================================
DEFAULT_STORAGE_PREFIX = "llmtoolkit:"
DEFAULT_STORAGE_FILE = "llm_toolkit_sessions.db"
SESSION_KEY_PREFIX = "session-"
