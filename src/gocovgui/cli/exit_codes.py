# mirror <sysexits.h>
EXIT_OK = 0  # Normal success
EXIT_GENERIC = 1  # Generic failure (collector failure, unexpected errors)
EXIT_DATAERR = 65  # Collector output was not a valid coverage document
EXIT_NOINPUT = 66  # Source file or requested function not found
EXIT_UNAVAILABLE = 69  # gocov tool missing or could not be installed
EXIT_SOFTWARE = 70  # Row id did not resolve against the model
EXIT_CONFIG = 78  # Invalid .gocovgui.toml
