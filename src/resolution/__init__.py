"""Librarian file resolution: locating files on the search path and reading their variables."""
