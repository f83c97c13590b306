from pathlib import Path

# Config
CONFIG_DIRNAME = ".docwf"
CONFIG_FILENAME = "config.yml"

# Artifacts
DEFAULT_OUTPUT_DIR = Path("docwf-output")
FINAL_DOCUMENT_FILENAME = "final_document.md"
FEEDBACK_LOG_FILENAME = "review_feedback_log.txt"

# Review protocol
CONTINUE_TOKEN = "CONTINUE"
REVISE_TOKEN = "REVISE:"
RAW_RESPONSE_PREVIEW_CHARS = 100
