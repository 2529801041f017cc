# src/bignat/cli.py

"""
bignat - explain number-theoretic computations on arbitrary-precision naturals

usage: see bignat -h

Every command parses its operands as decimal naturals (^[0-9]+$), runs the
library routine and prints the intermediate values the way a worked example
would show them.
"""

from __future__ import annotations

import argparse
import faulthandler
import random
import sys
import textwrap
import time
import traceback

from colorama import Fore, Style
from colorama import init as colorama_init

from bignat import __version__ as _ver
from bignat.config import load_default_settings, load_settings
from bignat.errors import BigNatError
from bignat.euler_phi import (
    calculate_euler_phi,
    calculate_euler_phi_factors,
    calculate_euler_phi_prime_power,
)
from bignat.fmt import abbr_nat, format_duration, format_factorization, format_n_minus_one
from bignat.multiplicative_order import (
    calculate_multiplicative_order_crt,
    calculate_multiplicative_order_naive,
)
from bignat.natural import BigNat
from bignat.primality import (
    get_aks_parameters_simple,
    is_prime_by_aks,
    is_prime_by_miller,
    is_probable_prime,
    test_compositeness_by_artjuhov,
    test_compositeness_by_fermat,
)
from bignat.runtime import APPLY, CFG
from bignat.runtime import current as _rt_current
from bignat.trial_division import GENERATORS, get_factors, make_factorizer


def _install_loud_error_handlers(debug: bool) -> None:
    if not debug:
        return
    faulthandler.enable()

    def _excepthook(exc_type, exc, tb):
        sys.stderr.write("\n[UNCAUGHT EXCEPTION]\n")
        traceback.print_exception(exc_type, exc, tb, file=sys.stderr)
        sys.stderr.flush()
    sys.excepthook = _excepthook


def _print_user_error(msg: str) -> None:
    """Uniform, one-line friendly error."""
    print(f"{Fore.RED}Error:{Style.RESET_ALL} {msg}", file=sys.stderr)


def _abbr(n: BigNat) -> str:
    limit = int(CFG("CLI.ABBREVIATE_DIGITS", 60))
    return abbr_nat(n, threshold=limit)


def _yes(text: str) -> str:
    return f"{Fore.GREEN}{Style.BRIGHT}{text}{Style.RESET_ALL}"


def _no(text: str) -> str:
    return f"{Fore.RED}{Style.BRIGHT}{text}{Style.RESET_ALL}"


def _dim(text: str) -> str:
    return f"{Style.DIM}{text}{Style.RESET_ALL}"


def natural(text: str) -> BigNat:
    return BigNat.cast(text)


# ---- commands ----


def _cmd_factor(args: argparse.Namespace) -> int:
    n = args.n
    factorizer = make_factorizer(GENERATORS["naive"]) if args.naive else None
    factors = get_factors(n, factorizer)
    if not factors:
        print(f"{_abbr(n)} has no non-trivial factors.")
        return 0
    print(f"{_abbr(n)} = {format_factorization(factors)}")
    if len(factors) == 1 and factors[0].k.eq(1):
        print(_yes(f"{_abbr(n)} is prime."))
    return 0


def _cmd_phi(args: argparse.Namespace) -> int:
    n = args.n
    if n.is_zero():
        _print_user_error("φ(0) is undefined.")
        return 2
    factors = get_factors(n)
    phi = calculate_euler_phi_factors(factors)
    parts = [f"φ({f})={calculate_euler_phi_prime_power(f.p, f.k)}" for f in factors]
    detail = f"{', '.join(parts)}" if parts else "φ(1)=1"
    print(f"φ({_abbr(n)}) = {_abbr(phi)}")
    print(_dim(f"  {detail}"))
    return 0


def _cmd_order(args: argparse.Namespace) -> int:
    a, n = args.a, args.n
    if args.naive:
        o = calculate_multiplicative_order_naive(a, n)
    else:
        o = calculate_multiplicative_order_crt(a, n)
    print(f"ord_{_abbr(n)}({_abbr(a)}) = {_abbr(o)}")
    return 0


def _cmd_fermat(args: argparse.Namespace) -> int:
    res = test_compositeness_by_fermat(args.n, args.a)
    a, n = _abbr(res.a), _abbr(res.n)
    print(f"r = a^(n-1) mod n = {a}^{_abbr(res.n.minus(1))} mod {n} = {_abbr(res.r)}")
    if res.is_composite_by_fermat:
        print(_no(f"{a} is a Fermat witness: {n} is composite."))
    else:
        print(_yes(f"{a} is not a Fermat witness: {n} is prime or {a} is a Fermat liar."))
    return 0


def _cmd_artjuhov(args: argparse.Namespace) -> int:
    res = test_compositeness_by_artjuhov(args.n, args.a)
    a, n = _abbr(res.a), _abbr(res.n)
    print(f"n - 1 = {format_n_minus_one(res.t, res.s)}  (t = {_abbr(res.t)}, s = {res.s})")
    print(f"r = a^(t·2^i) mod n = {_abbr(res.r)}  (i = {res.i})")
    if res.r_sqrt is not None:
        print(_dim(f"  value before the last squaring: {_abbr(res.r_sqrt)}"))
    if res.is_composite_by_artjuhov:
        print(_no(f"{a} is an Artjuhov witness: {n} is composite."))
        factors = res.factors()
        if factors:
            print(f"Non-trivial factor(s) of {n}: {', '.join(_abbr(f) for f in factors)}")
    else:
        print(_yes(f"{a} is not an Artjuhov witness: {n} is prime or {a} is a strong liar."))
    return 0


def _cmd_prime(args: argparse.Namespace) -> int:
    n = args.n
    t0 = time.perf_counter()
    if args.method == "miller":
        verdict = is_prime_by_miller(n)
        label = "prime"
    elif args.method == "aks":
        verdict = is_prime_by_aks(n)
        label = "prime"
    else:
        rng = random.Random(args.seed).random if args.seed is not None else None
        verdict = is_probable_prime(n, num_samples=args.samples, rng=rng)
        label = "probably prime"
    elapsed = format_duration(time.perf_counter() - t0)
    if verdict:
        print(_yes(f"{_abbr(n)} is {label}.") + " " + _dim(f"({args.method}, {elapsed})"))
    else:
        print(_no(f"{_abbr(n)} is composite.") + " " + _dim(f"({args.method}, {elapsed})"))
    return 0


def _cmd_aks(args: argparse.Namespace) -> int:
    n = args.n
    if n.lt(2):
        _print_user_error("AKS needs n >= 2.")
        return 2
    params = get_aks_parameters_simple(n)
    lg = BigNat(n.ceil_lg())
    print(f"⌈lg n⌉ = {lg}, ⌈lg n⌉² = {lg.pow(2)}, ⌊√n⌋ = {_abbr(n.floor_root(2))}")
    print(f"r = {params.r}  (φ(r) = {calculate_euler_phi(params.r)}, "
          f"ord_r(n) = {calculate_multiplicative_order_crt(n, params.r)})")
    print(f"M = {params.M}")
    if params.factor is not None:
        print(_no(f"{_abbr(n)} is composite: {_abbr(params.factor)} is a non-trivial factor."))
    elif params.is_prime:
        print(_yes(f"{_abbr(n)} is prime: n <= r."))
    else:
        print(_dim(f"The witnesses a = 1..{params.M} decide primality (bignat prime --method aks)."))
    return 0


# ---- argparse ----


def _build_parser() -> argparse.ArgumentParser:
    epilog = textwrap.dedent("""\
    examples:
      bignat factor 175507
      bignat artjuhov 561 2
      bignat prime 1000003 --method miller
      bignat aks 31
    """)

    p = argparse.ArgumentParser(
        prog="bignat",
        description="Arbitrary-precision number theory, worked step by step",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=epilog,
    )
    p.add_argument("--version", action="version", version=f"bignat {_ver}")
    p.add_argument("--profile", default=None, help="TOML profile to load (default: $BIGNAT_PROFILE)")
    p.add_argument("--debug", action="store_true", help="Show timings and internal trace info on stderr")

    sub = p.add_subparsers(dest="command", required=True, metavar="command")

    sp = sub.add_parser("factor", help="factor n by trial division")
    sp.add_argument("n", type=natural)
    sp.add_argument("--naive", action="store_true", help="try every odd number instead of the mod-30 wheel")
    sp.set_defaults(func=_cmd_factor)

    sp = sub.add_parser("phi", help="Euler's totient φ(n)")
    sp.add_argument("n", type=natural)
    sp.set_defaults(func=_cmd_phi)

    sp = sub.add_parser("order", help="multiplicative order of a modulo n")
    sp.add_argument("a", type=natural)
    sp.add_argument("n", type=natural)
    sp.add_argument("--naive", action="store_true", help="step through the powers of a")
    sp.set_defaults(func=_cmd_order)

    sp = sub.add_parser("fermat", help="Fermat compositeness test of n to base a")
    sp.add_argument("n", type=natural)
    sp.add_argument("a", type=natural)
    sp.set_defaults(func=_cmd_fermat)

    sp = sub.add_parser("artjuhov", help="Artjuhov (Miller-Rabin) test of n to base a")
    sp.add_argument("n", type=natural)
    sp.add_argument("a", type=natural)
    sp.set_defaults(func=_cmd_artjuhov)

    sp = sub.add_parser("prime", help="decide whether n is prime")
    sp.add_argument("n", type=natural)
    sp.add_argument("--method", choices=("probable", "miller", "aks"), default="probable")
    sp.add_argument("--samples", type=int, default=None, help="random bases for --method probable")
    sp.add_argument("--seed", type=int, default=None, help="seed the base sampler")
    sp.set_defaults(func=_cmd_prime)

    sp = sub.add_parser("aks", help="AKS parameters of n")
    sp.add_argument("n", type=natural)
    sp.set_defaults(func=_cmd_aks)

    return p


def main(argv=None) -> int:
    """Thin wrapper: catch friendly errors, hide tracebacks unless debug."""
    try:
        return _main_impl(argv)
    except BigNatError as e:
        _print_user_error(str(e))
        return 2
    except KeyboardInterrupt:
        print("Aborted by user.", file=sys.stderr)
        return 130
    except Exception as e:
        debug = ("--debug" in (argv if argv is not None else sys.argv))
        if debug:
            raise
        print(f"Unexpected error: {e.__class__.__name__}: {e}", file=sys.stderr)
        print("Run with --debug for a full traceback.", file=sys.stderr)
        return 1


# ---- main ----
def _main_impl(argv=None) -> int:
    colorama_init(autoreset=True)

    parser = _build_parser()
    args = parser.parse_args(argv)

    settings = load_settings(args.profile) if args.profile else load_default_settings()
    if settings is not None:
        APPLY(settings)

    rt = _rt_current()
    if args.debug:
        rt.debug = True
    _install_loud_error_handlers(rt.debug)

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
