"""Operations tracker package.

This package is organized by feature modules (users, records, analytics, ...)
with a thin Flask controller layer over service/repository layers, plus a
client-side data cache that talks to the HTTP API.
"""
