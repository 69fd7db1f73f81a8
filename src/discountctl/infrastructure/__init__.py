"""Infrastructure layer — transport decoding and block decryption.

This layer depends on stdlib and third-party libs (cryptography).
It must never import from domain, services, commands, or output.
The service layer bridges between domain models and infrastructure.
"""
