"""
------------------------------------------------------------------------------
Project:        HubSlip
File:           hubslip/__init__.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Croatian HUB-3 payment slip payload encoder. Contains the
                diacritic normalizer, MOD-11 reference generator, template
                placeholder resolver and the 14 line payload builder.
------------------------------------------------------------------------------
"""

__version__ = "1.0.0"
