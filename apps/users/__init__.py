"""Users app package.

Back-office accounts: administrators, managers and consultants log in with
e-mail and password and receive a JWT access token. Use
``apps.users.models.CustomUser`` as the AUTH_USER_MODEL throughout the
project.
"""
