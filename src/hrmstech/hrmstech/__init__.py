"""HRMSTech package.

Multi-tenant HR management organized by feature modules (organizations,
employees, invites, leave, payroll, ...) with a thin Flask JSON controller
layer on top of service/repository layers.
"""
