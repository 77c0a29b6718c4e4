"""Request builders, response models, a multipart form builder and a server-sent event reader for an OpenAI-style REST API."""

__version__ = "0.1.0"