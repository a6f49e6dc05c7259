"""Infrastructure adapters: document store, identity provider, cache, image host."""
