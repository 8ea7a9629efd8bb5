"""External image-embedding providers."""

from .hf_embedding_client import HF_CLIP_URL, HuggingFaceEmbeddingClient, parse_embedding

__all__ = ["HF_CLIP_URL", "HuggingFaceEmbeddingClient", "parse_embedding"]
