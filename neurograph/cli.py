"""Command line entry point for creating, querying and training networks."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, List

from . import config as cfg
from .core.activations import Activation
from .core.errors import NetworkError
from .network import Network
from .reporting.metrics import FanOut, TextSink, sink_for_path
from .reporting.plots import PlotAdapter

logger = logging.getLogger("neurograph.cli")


def _floats(text: str) -> List[float]:
    values = []
    for part in text.split(","):
        part = part.strip()
        try:
            values.append(float(part))
        except ValueError:
            raise argparse.ArgumentTypeError(f"not a number: {part!r}") from None
    return values


def _sizes(text: str) -> List[int]:
    try:
        sizes = [int(part.strip()) for part in text.split(",")]
    except ValueError:
        raise argparse.ArgumentTypeError(f"layer sizes must be integers: {text!r}") from None
    if len(sizes) < 2 or any(size <= 0 for size in sizes):
        raise argparse.ArgumentTypeError("need at least two positive layer sizes")
    return sizes


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="neurograph", description=__doc__)
    parser.add_argument("--config", type=Path, help="Optional JSON/YAML config override")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--file", type=Path, default=Path("./mynet.qndnn"), help="Path of the stored network"
    )
    common.add_argument(
        "--activation",
        help=f"Activation function ({', '.join(Activation.names())}); unknown names use logistic",
    )

    create = commands.add_parser("create", parents=[common], help="Create a new random network")
    create.add_argument("--layers", type=_sizes, help="Comma separated layer sizes, e.g. 2,3,1")
    create.add_argument("--seed", type=int, help="Seed for the weight initialisation")

    query = commands.add_parser("query", parents=[common], help="Evaluate a stored network")
    query.add_argument("--input", type=_floats, required=True, help="Input in CSV form")

    train = commands.add_parser("train", parents=[common], help="Train a stored network")
    train.add_argument("--input", type=_floats, required=True, help="Input in CSV form")
    train.add_argument("--expected", type=_floats, required=True, help="Expected output in CSV form")
    train.add_argument("-n", "--rounds", type=int, help="Number of rounds to learn")
    train.add_argument("--learning-rate", type=float, help="Step size of each weight change")
    train.add_argument("--threshold", type=float, help="Stop once the cumulative error is this low")
    train.add_argument("--stop-after", type=float, help="Wall-clock budget in seconds")
    train.add_argument("--metrics", type=Path, help="Write per-round errors to a .jsonl or .csv file")
    train.add_argument("--plot", type=Path, help="Directory to write the error curve into")
    train.add_argument(
        "--log-every-round", action="store_true", help="Log the cumulative error of every round"
    )
    return parser.parse_args(argv)


def _resolve_config(args: argparse.Namespace) -> dict:
    config = cfg.defaults()
    if args.config:
        config = cfg.merge(config, cfg.load_config(args.config))
    network = config.setdefault("network", {})
    train = config.setdefault("train", {})
    if args.activation is not None:
        network["activation"] = args.activation
    for key in ("layers", "seed"):
        value = getattr(args, key, None)
        if value is not None:
            network[key] = value
    for key in ("rounds", "learning_rate", "threshold", "stop_after"):
        value = getattr(args, key, None)
        if value is not None:
            train[key] = value
    if getattr(args, "log_every_round", False):
        train["log_every_round"] = True
    return config


def _create(args: argparse.Namespace, config: dict) -> int:
    network_cfg = config["network"]
    network = Network.construct(
        *network_cfg["layers"],
        activation=network_cfg.get("activation"),
        seed=network_cfg.get("seed"),
    )
    network.save(args.file)
    logger.info("created %r at %s", network, args.file)
    return 0


def _query(args: argparse.Namespace, config: dict) -> int:
    network = Network.load(args.file, config["network"].get("activation"))
    result = network.output(args.input)
    print(",".join(repr(value) for value in result))
    return 0


def _train(args: argparse.Namespace, config: dict) -> int:
    network = Network.load(args.file, config["network"].get("activation"))
    train_cfg = config["train"]
    threshold = train_cfg.get("threshold")
    plots = (
        PlotAdapter(
            args.plot,
            enable_plots=True,
            threshold=None if threshold is None else float(threshold),
        )
        if args.plot
        else None
    )
    metrics = sink_for_path(args.metrics) if args.metrics else None
    text = TextSink(sys.stderr) if train_cfg.get("log_every_round") else None
    sink = FanOut(text, metrics, plots) if (text or metrics or plots) else None
    strategy = cfg.build_strategy(train_cfg, sink=sink)

    result = network.train(
        [(args.input, args.expected)],
        float(train_cfg["learning_rate"]),
        strategy,
    )
    if plots is not None:
        plots.close()
    network.save(args.file)
    logger.info("trained %d rounds, saved to %s", result.rounds, args.file)
    return 0


_COMMANDS = {"create": _create, "query": _query, "train": _train}


def main(argv: Iterable[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        config = _resolve_config(args)
        return _COMMANDS[args.command](args, config)
    except (NetworkError, OSError, RuntimeError, ValueError) as exc:
        logger.error("%s failed: %s", args.command, exc)
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
