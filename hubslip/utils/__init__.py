"""
------------------------------------------------------------------------------
Project:        HubSlip
File:           hubslip/utils/__init__.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Pure helper functions (text folding, reference numbers, IBAN).
------------------------------------------------------------------------------
"""
