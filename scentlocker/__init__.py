"""ScentLocker - perfume search and personal collection manager.

Lexical and vibe search over a fragrance dataset, camera based bottle
identification through an external CLIP embedding API, and a local
locker of saved fragrances.
"""

__version__ = "0.1.0"
__author__ = "ScentLocker Team"
