# vmware_inventory/__init__.py
"""
Hardware and vSAN capacity inventory of vCenter-managed ESXi hosts.
"""

__version__ = '0.1.0'
