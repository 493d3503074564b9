from tvtantrum.services.importer.github import GitHubCatalogClient
from tvtantrum.services.importer.importer import CatalogImporter, CatalogImportError, ImportReport

__all__ = ["CatalogImporter", "CatalogImportError", "GitHubCatalogClient", "ImportReport"]
