"""TubeRelay: resolve YouTube links and download media through a local relay."""
