"""Domain layer for tokobook application.

Services live in their own modules (``tokobook.domain.expense`` and so on);
they are not re-exported here so the database layer can import
``tokobook.domain.entities`` without a cycle.
"""
