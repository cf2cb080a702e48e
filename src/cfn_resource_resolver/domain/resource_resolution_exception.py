class ResourceResolutionException(Exception):
    pass
