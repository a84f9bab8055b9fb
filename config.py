"""
Configuration settings for the TF-IDF document search engine.

This module contains all configurable parameters for the search engine.
Modify these values, or pass a config_dict to TextSearchEngine, to
customize the behavior of the system.
"""

from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent
CORPUS_DIR = PROJECT_ROOT / "data"
VECTOR_DB_PATH = PROJECT_ROOT / "index" / "tfidf_vectors.db"  # None disables vector persistence

# Document discovery
TEXT_EXTENSIONS = ['.txt', '.docx', '.doc', '.pdf']  # Files offered to the extractor

# Index settings
DF_MODE = "document"  # Document frequency: "document" (distinct docs) or "occurrence" (legacy per-token)
PARALLEL_WORKERS = 4  # Worker threads for the extraction/count pass

# Search settings
TOP_K_RESULTS = 10  # Number of results to return

# Query suggestion settings
AUTO_CORRECT_ENABLED = True  # Suggest spellings for query terms with no postings
MAX_EDIT_DISTANCE = 2  # Maximum edit distance for suggestions

# Output settings
SHOW_SCORES = True  # Show relevance scores in results

# Debug settings
LOG_LEVEL = "INFO"  # Logging level: DEBUG, INFO, WARNING, ERROR
