##############################################################################
# Global constants
##############################################################################

JSON_TYPE_TAG = "Tensor"                   # value of the "type" field
JSON_FIELDS = ("type", "size", "data")     # keys of the serialized record
