from jobboard.services.uploads import CVStorage

__all__ = ["CVStorage"]
