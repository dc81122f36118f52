"""HyperUI core: inter-parameter dependency language (IDL) for OpenAPI object schemas."""

__version__ = "0.1.0"
