from .document_loader import DocumentLoader, document_loader
from .source_location import SourceLocation, SourceMap, lookup_source

__all__ = ["DocumentLoader", "document_loader", "SourceLocation", "SourceMap", "lookup_source"]
