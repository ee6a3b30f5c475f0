"""Fixed on-disk names shared by every package-store component.

These names are a compatibility surface: packages installed by an earlier
release must stay readable after an upgrade, so none of them may change.
"""

from __future__ import annotations

STATUS_FILE_NAME = "status.json"
PACKAGE_FILE_NAME = "package.json"
UNZIPPED_FOLDER_NAME = "unzipped"
DIFF_MANIFEST_FILE_NAME = "hotcodepush.json"

# ZIP local file header.
ZIP_HEADER: bytes = bytes((0x50, 0x4B, 0x03, 0x04))

# Transient name for the raw download inside a package folder. Not persisted
# past staging, so it is not part of the compatibility surface.
DOWNLOAD_FILE_NAME = "download.bin"
