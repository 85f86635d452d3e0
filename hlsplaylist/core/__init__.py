"""Codec core: attribute grammar, entity codecs, decoder and encoder."""

from .attributes import AttributeList, encode_attributes, parse_attribute_list
from .decoder import Decoder, decode, decode_lines
from .encoder import Encoder, encode, encode_lines

__all__ = [
    "AttributeList",
    "Decoder",
    "Encoder",
    "decode",
    "decode_lines",
    "encode",
    "encode_attributes",
    "encode_lines",
    "parse_attribute_list",
]
