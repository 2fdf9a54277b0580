"""Shared constants for the work protocol generator."""

# Length of the abbreviated commit sha printed in the protocol
SHORT_SHA_LENGTH = 7

# Marks a commit without an associated pull request or issue
NO_PR_NUMBER = -1

# Hours attributed to each pull request listed in the protocol
DEFAULT_PR_HOURS = 5

OUTPUT_FILENAME_PATTERN = "{name}_{date}_protocol.docx"
