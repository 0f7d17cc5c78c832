"""CareerConnect.

This package hosts two web applications that share one FastAPI server and one
relational database:

- **Recruiting**: job postings, candidate applications, recruiter dashboards,
  configurable application forms and committee user management.
- **Qurban administration**: sacrificial animal (hewan) inventory, sponsor
  (mudhohi) registration and payments, recipient distribution, product logs,
  shipments, coupons and the mosque's bookkeeping (keuangan).

Core subpackages
----------------

- ``careerconnect.core``: logging, monitoring, pure helpers (formatters,
  validation, Hijri calendar, animal grouping) and the database layer
  (entities, repositories, session management).
- ``careerconnect.integrations``: thin httpx clients for YouTube, Google
  Sheets, the OCR service, the email relay and the local blob storage.
- ``careerconnect.server``: FastAPI application, routers, authentication,
  services and middleware.
"""
