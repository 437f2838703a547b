"""
Command-line tools for SealPack.

- pack: build a verified archive from a list of files
"""
