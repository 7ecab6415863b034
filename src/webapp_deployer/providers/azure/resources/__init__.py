"""
Per-resource create/check functions for Azure.

Each module wraps one Azure management client. Create functions are
create-or-update calls; nothing here deletes resources.
"""
