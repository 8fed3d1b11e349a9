"""Users app package.

Defines the custom user model used as ``AUTH_USER_MODEL``. Accounts log in
with their email address; customers who book without registering get a
user record with an unusable password, created or refreshed by the
booking flow through ``User.objects.upsert_customer``.
"""
