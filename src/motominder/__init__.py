"""
MotoMinder: motorcycle records behind verified repository writes and
role-guarded use-case interactors.

Layers (inner to outer):
    core/          Error aggregate, OperationStatus, tagged results, constants
    validators/    Pure field-validation rules
    models/        SQLAlchemy models (the Motorcycle entity)
    repositories/  Generic repository + motorcycle-specific queries
    auth/          Roles and the authorization service
    use_cases/     Requests, responses and interactors
"""
