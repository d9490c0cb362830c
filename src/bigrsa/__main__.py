"""The Command Line Interface for bigrsa, including Interactive elements.

A hybrid CLI/ICLI that asks interactively for whatever the command line left out, unless told to run
non-interactively. The `roundtrip` subcommand is the classic demonstration: read a line of text, generate a key
pair, encrypt, decrypt and check that the text survived.

Typical usage example:

    bigrsa roundtrip --keysize 256 --message "Hi there!"
    OR
    python -m bigrsa
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import argparse
import json
import logging
import pathlib
import statistics
import sys
import time
import typing

import bigrsa
from bigrsa import display
from bigrsa import primes
from bigrsa import rsa
from bigrsa.bignum import BigInteger
from bigrsa.errors import BigRSAError

logger = logging.getLogger("bigrsa.cli")


class HelpData(typing.NamedTuple):
    description: str
    format: typing.Type = str
    choices: list[str] | None = None
    default: typing.Any = None
    advanced: bool = False


help_dict: dict[str, HelpData] = {
    "subcommand":
        HelpData(
            description="The available subcommands in bigrsa.",
            choices=["roundtrip", "keygen", "isprime", "genprime", "benchmark"],
        ),
    "roundtrip":
        HelpData("Encrypt and decrypt a line of text with a fresh key pair."),
    "keygen":
        HelpData("Generate a key pair and print it as PEM."),
    "isprime":
        HelpData("Miller-Rabin primality check."),
    "genprime":
        HelpData("Random prime generation."),
    "benchmark":
        HelpData("Key generation runtime analysis."),
    "message":
        HelpData(
            description="Line of text to round trip. If Path start with `P:`",
            format=str,
        ),
    "keysize":
        HelpData(
            description="Key size (in bits).",
            choices=["64", "128", "256", "512", "1024", "2048"],
            default="512",
        ),
    "number":
        HelpData(
            description="Decimal number to test for primality.",
            format=str,
        ),
    "bits":
        HelpData(
            description="Bit length of the prime.",
            format=int,
            default=256,
        ),
    "rounds":
        HelpData(
            description="Extra random Miller-Rabin witnesses on top of the fixed set.",
            format=int,
            advanced=True,
            default=0,
        ),
    "key_sizes":
        HelpData(
            description="Comma separated key sizes to benchmark.",
            format=str,
            advanced=True,
            default="64,128,256,512",
        ),
    "trials":
        HelpData(
            description="Number of trials per key size.",
            format=int,
            advanced=True,
            default=3,
        ),
    "output":
        HelpData(
            description="Also write the benchmark results to this JSON file.",
            format=pathlib.Path,
            advanced=True,
        ),
}

needs = {
    "roundtrip": ("message", "keysize"),
    "keygen": ("keysize",),
    "isprime": ("number", "rounds"),
    "genprime": ("bits", "rounds"),
    "benchmark": ("key_sizes", "trials"),
}

rounds = argparse.ArgumentParser(add_help=False)
rounds.add_argument("--rounds", "-r", type=help_dict["rounds"].format, help=help_dict["rounds"].description)
keysize = argparse.ArgumentParser(add_help=False)
keysize.add_argument("--keysize", "-k", choices=help_dict["keysize"].choices, help=help_dict["keysize"].description)
corep = argparse.ArgumentParser(prog="bigrsa")
corep.add_argument("--version", "-v", action="version", version=f"%(prog)s {bigrsa.__version__}")
corep.add_argument("--non-interactive", "-n", action="store_true", help="Enable non-interactive mode")
corep.add_argument("--advanced", "-a", action="store_true", help="Enable advanced mode, for interactive mode")
corep.add_argument("--verbose", "-V", action="store_true", help="Enable debug logging")
commands = corep.add_subparsers(dest="subcommand", title="Subcommands")

roundtrip = commands.add_parser("roundtrip", parents=[keysize], help=help_dict["roundtrip"].description)
roundtrip.add_argument("--message", "-m", type=help_dict["message"].format, help=help_dict["message"].description)
keygen = commands.add_parser("keygen", parents=[keysize], help=help_dict["keygen"].description)
isprime = commands.add_parser("isprime", parents=[rounds], help=help_dict["isprime"].description)
isprime.add_argument("--number", "-N", type=help_dict["number"].format, help=help_dict["number"].description)
genprime = commands.add_parser("genprime", parents=[rounds], help=help_dict["genprime"].description)
genprime.add_argument("--bits", "-b", type=help_dict["bits"].format, help=help_dict["bits"].description)
benchmark = commands.add_parser("benchmark", help=help_dict["benchmark"].description)
benchmark.add_argument("--key-sizes", type=help_dict["key_sizes"].format, help=help_dict["key_sizes"].description)
benchmark.add_argument("--trials", "-t", type=help_dict["trials"].format, help=help_dict["trials"].description)
benchmark.add_argument("--output", "-o", type=help_dict["output"].format, help=help_dict["output"].description)


def checkmodes(arg: str, mode: tuple[bool, bool]):
    helper_data = help_dict[arg]
    if (mode[0] or (helper_data.advanced and not mode[1])) and helper_data.default is not None:
        return helper_data.default
    if mode[0]:
        raise IOError(f"Argument {arg} is missing and non-interactive mode is active.")
    return helper_data


def choice_handler(arg: str, mode: tuple[bool, bool], prntr: typing.Callable = print):
    helper_data = checkmodes(arg, mode)
    if not isinstance(helper_data, HelpData):
        return helper_data
    prntr(f"Please specify the {arg}!")
    prntr("Description: " + helper_data.description)
    for choice in helper_data.choices:
        defstring = " (Default)" if choice == helper_data.default else ""
        if help_dict.get(choice, None):
            prntr(f"{choice} - {help_dict[choice].description}" + defstring)
        else:
            prntr(f"{choice}" + defstring)
    if helper_data.default is not None:
        prntr("To accept default just click enter. Otherwise specify value.")
    while True:
        ch = input(f"{arg}: ")
        if ch in helper_data.choices:
            return ch
        if not ch and helper_data.default is not None:
            return helper_data.default
        prntr("Please select an option from the list.")


def input_handler(arg: str, mode: tuple[bool, bool], prntr: typing.Callable = print):
    helper_data = checkmodes(arg, mode)
    if not isinstance(helper_data, HelpData):
        return helper_data
    prntr(f"Please specify the {arg}!")
    prntr("Description: " + helper_data.description)
    if helper_data.default is not None:
        prntr(f"Default value: {helper_data.default}")
        prntr("To accept default just click enter. Otherwise specify value.")
    cls = helper_data.format
    while True:
        ch = input(f"{arg}: ")
        if not ch and helper_data.default is not None:
            return helper_data.default
        if ch == "":
            prntr("Please provide a value.")
            continue
        try:
            return cls(ch)
        except ValueError:
            prntr(f"We could not convert your value to {cls.__name__}.")


def check_message(mess: str) -> str:
    """Parse message for path-notice, reading the first line of the file."""
    if mess.startswith("P:"):
        with open(mess[2:], "r", encoding="utf-8") as f:
            mess = f.readline().rstrip("\r\n")
    return mess


def run_benchmark(key_sizes: list[int], trials: int, timer: typing.Callable[[], float] = time.perf_counter) -> dict:
    """Median key generation runtime per key size.

    Failed generations count as -1.0, and a key size where every trial failed reports -1.0.

    Args:
        key_sizes: Modulus sizes to measure, in bits.
        trials: Number of key generations per size.
        timer: Clock returning seconds. Defaults to `time.perf_counter`.

    Returns:
        JSON-ready dict of the form `{"time_complexity": [{"key_size": ..., "median_runtime": ...}]}`.
    """
    results = []
    for bits in key_sizes:
        logger.info("Measuring for %d bits...", bits)
        runtimes = []
        for _ in range(trials):
            start = timer()
            try:
                rsa.generate_key_pair(bits)
            except BigRSAError as exc:
                logger.warning("Failed to generate keys for %d bits: %s", bits, exc)
                runtimes.append(-1.0)
                continue
            runtimes.append(timer() - start)
        median = statistics.median(runtimes) if runtimes and max(runtimes) > 0 else -1.0
        results.append({"key_size": bits, "median_runtime": round(median, 6)})
    return {"time_complexity": results}


def run_roundtrip(message: str, bits: int, pspr: typing.Callable = print) -> bool:
    """Generate keys, encode, encrypt, decrypt, decode and compare."""
    pair = rsa.generate_key_pair(bits)
    pspr(f"Public Key (n, e): ({pair.public_key.n}, {pair.public_key.e})")
    pspr(f"Private Key (n, d): ({pair.private_key.n}, {pair.private_key.d})")
    pspr(f"Modulus (Base64): {display.format_big_integer(pair.public_key.n)}")
    number = rsa.string_to_number(message)
    pspr(f"Message as BigInteger: {number}")
    encrypted = rsa.encrypt(number, pair.public_key)
    pspr(f"Encrypted Message: {encrypted}")
    decrypted = rsa.decrypt(encrypted, pair.private_key)
    pspr(f"Decrypted BigInteger: {decrypted}")
    text = rsa.number_to_string(decrypted).decode("utf-8", errors="replace")
    pspr(f"Decrypted Message (original): {text}")
    return text == message


def main(argv: list[str] | None = None):
    """Core Hybrid CLI/ICLI (Command Line Interface/Interactive Command Line Interface)"""
    args = corep.parse_args(argv)
    pstatus = (args.non_interactive, args.advanced)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    def pspr(text: str):
        """Print only if not in non-interactive mode."""
        if not pstatus[0]:
            print(text)

    pspr("Welcome to bigrsa!\n")
    if not args.subcommand:
        args.subcommand = choice_handler("subcommand", pstatus)
    for reqs in needs[args.subcommand]:
        if getattr(args, reqs, None) is None:
            if help_dict[reqs].choices is not None:
                res = choice_handler(reqs, pstatus)
            else:
                res = input_handler(reqs, pstatus)
            setattr(args, reqs, res)
        else:
            pspr(f"{reqs}: {getattr(args, reqs)}")
    pspr("\nInput Complete! Executing...")
    try:
        match args.subcommand:
            case "roundtrip":
                if not run_roundtrip(check_message(args.message), int(args.keysize), pspr):
                    print("Encryption and decryption failed. Something went wrong!")
                    sys.exit(1)
                pspr("\nEncryption and decryption succeeded!")
            case "keygen":
                print(display.render_key_pair(rsa.generate_key_pair(int(args.keysize))), end="")
            case "isprime":
                verdict = primes.is_prime(BigInteger(args.number), args.rounds)
                print("prime" if verdict else "composite")
            case "genprime":
                print(primes.generate_prime_with_bit_length(args.bits, extra_rounds=args.rounds))
            case "benchmark":
                sizes = [int(size) for size in args.key_sizes.split(",") if size.strip()]
                report = json.dumps(run_benchmark(sizes, args.trials), indent=2)
                print(report)
                if getattr(args, "output", None) is not None:
                    with open(args.output, "w", encoding="utf-8") as f:
                        f.write(report)
    except BigRSAError as exc:
        print(f"An error occurred: {exc}", file=sys.stderr)
        sys.exit(2)
    pspr("Thank you for using bigrsa!")
    pspr("Goodbye!")


if __name__ == "__main__":
    main()
