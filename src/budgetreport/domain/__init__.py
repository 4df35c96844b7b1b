"""Domain layer for budgetreport application.

Services are imported from their modules (e.g. ``budgetreport.domain.report``)
so that the database layer can import entities without a cycle.
"""
