"""Infrastructure adapters: dataset files, locker storage and the embedding API."""
