"""svue-gateway backend.

Stateless REST/JSON gateway in front of the StudentVue (Edupoint PXP)
SOAP web services. Session state travels in an encrypted client-held token.

Copyright (C) 2025 Global Digital Labs (gdlabs.io)
SPDX-License-Identifier: LGPL-3.0-or-later
"""

__version__ = "1.0.0"
