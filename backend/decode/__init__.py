from .json_fields import DecodeResult, decode_json_field, decode_options, decode_variants

__all__ = ["DecodeResult", "decode_json_field", "decode_options", "decode_variants"]
