"""
------------------------------------------------------------------------------
Project:        HubSlip
File:           hubslip/models/__init__.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Package initializer for data models. Exports the record
                shapes and the per-call slip types for easy access.
------------------------------------------------------------------------------
"""

from .records import Contact, Organization, PaymentTemplate, UnderagedMember
from .slip import PaymentSlipRequest, ResolvedPayload
