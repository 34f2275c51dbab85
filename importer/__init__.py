"""
Streams EU TARIC XML exports into the element store.

See the documentation on the :mod:`~importer.events`,
:mod:`~importer.normaliser`, :mod:`~importer.parsers` and
:mod:`~importer.taric` for more information.
"""
