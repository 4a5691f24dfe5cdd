"""Process exit codes for the modpull CLI."""

EXIT_SUCCESS = 0
EXIT_RESOLUTION_FAILURE = 1
EXIT_DOWNLOAD_FAILURE = 2
EXIT_INVALID_USAGE = 3
EXIT_REGISTRY_ERROR = 4
