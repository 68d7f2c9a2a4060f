from catalog_resolver.runners.local import LocalResolverPipeline

__all__ = ["LocalResolverPipeline"]
