"""
chainstatsd - send a single metric from the command line

Copyright (c) 2024 Aiven Ltd
See LICENSE for details
"""
import argparse
import logging
import os
import sys

from . import config, logutil, version
from .client import StatsClient
from .errors import InvalidConfigurationError

METRIC_METHODS = ["timing", "increment", "decrement", "gauge", "histogram", "set"]
VALUE_OPTIONAL = {"increment", "decrement"}


class CommandError(Exception):
    pass


def parse_value(metric, text):
    if text is None:
        if metric not in VALUE_OPTIONAL:
            raise CommandError("A value is required for {} metrics".format(metric))
        return None
    for value_type in (int, float):
        try:
            return value_type(text)
        except ValueError:
            pass
    if metric == "set":
        return text
    raise CommandError("Value {!r} is not a number".format(text))


def build_config(args):
    if args.config:
        config_obj = config.read_json_config_file(args.config, add_defaults=False)
    else:
        config_obj = {}
    for key in ["host", "port", "prefix", "suffix"]:
        value = getattr(args, key)
        if value is not None:
            config_obj[key] = value
    if args.mock:
        config_obj["mock"] = True
    return config.set_and_check_config_defaults(config_obj)


def send_metric(config_obj, metric, names, value, sample_rate=None, tags=None):
    results = []
    with StatsClient(config_obj) as client:
        stat = getattr(client, metric)(names[0] if len(names) == 1 else names, value)
        if sample_rate is not None:
            stat = stat.sample_rate(sample_rate)
        if tags:
            stat = stat.tags(tags)
        stat.send(lambda error, sent_bytes: results.append((error, sent_bytes)))

    if not results:
        print("Metric {!r} was not sent due to sampling".format(names))
        return 0
    error, sent_bytes = results[0]
    if error:
        raise CommandError("Sending metric {!r} failed: {!r}".format(names, error))
    print("Sent {} bytes".format(sent_bytes))
    return 0


def main(args=None):
    parser = argparse.ArgumentParser()
    parser.add_argument("-D", "--debug", help="Enable debug logging", action="store_true")
    parser.add_argument("--version", action="version", help="show program version", version=version.__version__)
    parser.add_argument("--config", help="configuration file", default=os.environ.get("CHAINSTATSD_CONFIG"))
    parser.add_argument("--host", help="statsd host")
    parser.add_argument("--port", help="statsd port", type=int)
    parser.add_argument("--prefix", help="prefix prepended to metric names")
    parser.add_argument("--suffix", help="suffix appended to metric names")
    parser.add_argument("--mock", help="do not send anything over the network", action="store_true")
    parser.add_argument("--tag", help="tag in key:value form, can be repeated", action="append", default=[])
    parser.add_argument("--sample-rate", help="client side sample rate between 0 and 1", type=float)
    parser.add_argument("-v", "--value", help="metric value, defaults to 1 for increment and decrement")
    parser.add_argument("metric", help="metric type", choices=METRIC_METHODS)
    parser.add_argument("name", help="metric name, sent to all names if given more than once", nargs="+")

    args = parser.parse_args(args)
    logutil.configure_logging(level=logging.DEBUG if args.debug else logging.INFO, short_log=True)

    try:
        value = parse_value(args.metric, args.value)
        config_obj = build_config(args)
        return send_metric(config_obj, args.metric, args.name, value, args.sample_rate, args.tag)
    except (CommandError, InvalidConfigurationError) as ex:
        print("FATAL: {}".format(ex))
        return 1


if __name__ == "__main__":
    sys.exit(main() or 0)
