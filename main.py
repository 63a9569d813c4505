"""主程序入口 - 编译、检查和采样单变量函数 f(x)"""
import argparse
import logging
import sys

from config.config import LOGGING_CONFIG, SAMPLING_CONFIG, validate_config
from core import FunctionParser
from sampling import FunctionSampler
from utils.metrics import calculate_data_range, count_undefined

logger = logging.getLogger(__name__)


def run_check(args):
    compiled = FunctionParser.compile(args.definition)
    if not compiled.is_valid:
        print(compiled.describe_error())
        print(args.definition)
        if compiled.error_position >= 0:
            print(" " * compiled.error_position + "^")
        return 1
    print(f"Postfix: {compiled.postfix_string()}")
    return 0


def run_eval(args):
    compiled = FunctionParser.compile(args.definition)
    if not compiled.is_valid:
        logger.error(compiled.describe_error())
        return 1
    for x in args.x:
        print(f"{x:g} -> {compiled.evaluate(x):.10g}")
    return 0


def run_sample(args):
    sampler = FunctionSampler()
    compiled = sampler.compile(args.definition)
    if not compiled.is_valid:
        logger.error(compiled.describe_error())
        return 1

    series = sampler.sample(compiled, args.x0, args.x1, args.dx)
    logger.info(f"Sampled {len(series)} points, {count_undefined(series)} undefined")

    if args.output_path:
        logger.info(f"Saving samples to {args.output_path}")
        series.rename("y").to_csv(args.output_path)
    else:
        for x, y in series.items():
            print(f"{x:g}\t{y:.10g}")

    min_x, max_x, min_y, max_y = calculate_data_range(series)
    print(f"Data range: x=[{min_x:g}, {max_x:g}], y=[{min_y:.6g}, {max_y:.6g}]")
    return 0


def build_parser():
    parser = argparse.ArgumentParser(description="Single-variable function compiler and evaluator")
    parser.add_argument(
        "--log_level",
        type=str,
        default=LOGGING_CONFIG["level"],
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    check = subparsers.add_parser("check", help="Parse a definition and print its postfix form")
    check.add_argument("definition", type=str, help='Function of x, e.g. "x + 2*x*sin(100*pi*x)"')
    check.set_defaults(handler=run_check)

    evaluate = subparsers.add_parser("eval", help="Evaluate a definition at one or more values of x")
    evaluate.add_argument("definition", type=str, help="Function of x")
    evaluate.add_argument("x", type=float, nargs="+", help="Values of the independent variable")
    evaluate.set_defaults(handler=run_eval)

    sample = subparsers.add_parser("sample", help="Evaluate a definition at x0, x0+dx, ..., x1")
    sample.add_argument("definition", type=str, help="Function of x")
    sample.add_argument("--x0", type=float, default=SAMPLING_CONFIG["x0"], help="Start of the range (inclusive)")
    sample.add_argument("--x1", type=float, default=SAMPLING_CONFIG["x1"], help="End of the range (inclusive)")
    sample.add_argument("--dx", type=float, default=SAMPLING_CONFIG["dx"], help="Sample interval")
    sample.add_argument(
        "--output_path",
        type=str,
        default=None,
        help="Save the samples as CSV instead of printing them"
    )
    sample.set_defaults(handler=run_sample)
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    # 设置日志
    logging.basicConfig(level=getattr(logging, args.log_level), format=LOGGING_CONFIG["format"])
    validate_config()
    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
