"""Terminal and report renderers for decoded ELF files."""
