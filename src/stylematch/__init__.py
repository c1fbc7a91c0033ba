"""
Style matching pipeline.

Components, leaf-first:
- text_quality: pin text cleaning and usable/low-signal classification
- embedding_cache: content-addressed embedding cache over a document store
- profile: style profile (mean of pin vectors)
- ranker: cosine similarity and top-K ranking
- ingestion: board paging and pin normalization
- pipeline: the end-to-end ranking service

Supporting modules: models (pydantic data contracts), store (whole-document
persistence), catalog (product list), session (provider credential) and
limits (request clamps).
"""
