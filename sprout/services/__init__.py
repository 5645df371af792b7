"""Services that talk to git, the filesystem and the user's tools."""
