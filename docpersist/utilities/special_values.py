ABSTRACT = "ABSTRACT"
""" 
This keyword is used for:
    - Documents (__collection_name__), for base classes which are never stored themselves
    - Documents (__type_id__)

To indicate an item that does not need to be registered.
"""

AUTO = "AUTO_1234"
"""
This is used with Documents to assign a __type_id__ based on the class name.
"""
