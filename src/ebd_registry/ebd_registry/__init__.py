"""EBD Registry package.

Sunday-school (Escola Bíblica Dominical) class registration and reporting,
organized by feature modules (classes, students, registrations, reports, ...)
with a thin Flask controller layer over service/repository layers.
"""
