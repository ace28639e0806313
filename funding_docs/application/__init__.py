"""Application layer: services composing the pipeline and the registry for the API."""
