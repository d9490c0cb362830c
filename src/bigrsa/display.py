"""Human-readable rendering of key pairs, PEM markers around Base64 encoded DER.

The public half uses the PKCS#1 `RSAPublicKey` structure so standard tools can load it. A textbook private key holds
no primes or CRT components, so PKCS#1 `RSAPrivateKey` does not fit; the private half gets a two-field sequence of
its own instead. Nothing here touches the disk.

Typical usage example:

    pair = generate_key_pair(512)
    print(render_key_pair(pair))
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import base64
import binascii

from pyasn1 import error
from pyasn1.codec.der import decoder
from pyasn1.codec.der import encoder
from pyasn1.type import namedtype
from pyasn1.type import univ
from pyasn1_modules import rfc8017

from bigrsa.bignum import BigInteger
from bigrsa.errors import InvalidArgument
from bigrsa.rsa import KeyPair
from bigrsa.rsa import PrivateKey
from bigrsa.rsa import PublicKey

PEM_LINE_WIDTH = 64

PEM_TYPES = {
    "PUBLIC": ("-----BEGIN RSA PUBLIC KEY-----", "-----END RSA PUBLIC KEY-----"),
    "PRIVATE": ("-----BEGIN RSA PRIVATE EXPONENT-----", "-----END RSA PRIVATE EXPONENT-----"),
}


class RSAPrivateExponent(univ.Sequence):
    """Just the modulus and private exponent, as no standard structure carries a CRT-less key."""
    componentType = namedtype.NamedTypes(
        namedtype.NamedType("modulus", univ.Integer()),
        namedtype.NamedType("privateExponent", univ.Integer()),
    )


def format_big_integer(number: BigInteger) -> str:
    """Base64 of the minimal big-endian byte form of a non-negative number. Zero gives an empty string."""
    return base64.b64encode(bytes(BigInteger(number).to_digits(256))).decode("ascii")


def wrap_pem(subtype: str, data: bytes) -> str:
    """Wrap DER bytes in PEM markers, Base64 lines of `PEM_LINE_WIDTH` characters."""
    header, footer = PEM_TYPES[subtype]
    payload = base64.b64encode(data).decode("ascii")
    lines = [payload[i:i + PEM_LINE_WIDTH] for i in range(0, len(payload), PEM_LINE_WIDTH)]
    return "\n".join([header, *lines, footer]) + "\n"


def unwrap_pem(subtype: str, text: str) -> bytes:
    """Strip PEM markers and decode the Base64 body.

    Raises:
        InvalidArgument: If the markers are missing or the body is not Base64.
    """
    header, footer = PEM_TYPES[subtype]
    lines = [line.strip() for line in text.strip().splitlines()]
    if not lines or lines[0] != header:
        raise InvalidArgument(f"PEM text does not start with {header}")
    if lines[-1] != footer or len(lines) < 2:
        raise InvalidArgument(f"PEM text does not end with {footer}")
    try:
        return base64.b64decode("".join(lines[1:-1]), validate=True)
    except binascii.Error as exc:
        raise InvalidArgument("PEM body is not valid Base64.") from exc


def render_public_key(key: PublicKey) -> str:
    keydata = rfc8017.RSAPublicKey()
    keydata["modulus"] = int(key.n)
    keydata["publicExponent"] = int(key.e)
    return wrap_pem("PUBLIC", encoder.encode(keydata))


def render_private_key(key: PrivateKey) -> str:
    keydata = RSAPrivateExponent()
    keydata["modulus"] = int(key.n)
    keydata["privateExponent"] = int(key.d)
    return wrap_pem("PRIVATE", encoder.encode(keydata))


def render_key_pair(pair: KeyPair) -> str:
    """Render both halves of a key pair, public first."""
    return render_public_key(pair.public_key) + render_private_key(pair.private_key)


def parse_public_key(text: str) -> PublicKey:
    """Read back what `render_public_key()` produced.

    Raises:
        InvalidArgument: If the text is not a PEM wrapped PKCS#1 public key.
    """
    payload = unwrap_pem("PUBLIC", text)
    try:
        keydata, _ = decoder.decode(payload, asn1Spec=rfc8017.RSAPublicKey())
    except error.PyAsn1Error as exc:
        raise InvalidArgument("Malformed public key structure.") from exc
    return PublicKey(BigInteger(int(keydata["modulus"])), BigInteger(int(keydata["publicExponent"])))


def parse_private_key(text: str) -> PrivateKey:
    """Read back what `render_private_key()` produced.

    Raises:
        InvalidArgument: If the text is not a PEM wrapped private exponent structure.
    """
    payload = unwrap_pem("PRIVATE", text)
    try:
        keydata, _ = decoder.decode(payload, asn1Spec=RSAPrivateExponent())
    except error.PyAsn1Error as exc:
        raise InvalidArgument("Malformed private key structure.") from exc
    return PrivateKey(BigInteger(int(keydata["modulus"])), BigInteger(int(keydata["privateExponent"])))
