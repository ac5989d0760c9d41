#!/usr/bin/env python3
"""One-shot demo: emits bunyan lines for every flavor and the stdlib logger."""

import argparse
import logging
import os
import sys
import threading
import time

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from bunyan_encoder.adapters import (
    JulAdapter,
    JulRecord,
    Log4j2Adapter,
    Log4j2Event,
    Log4jAdapter,
    Log4jEvent,
)
from bunyan_encoder.config import load_config, load_yaml_config
from bunyan_encoder.formatter import configure_logging
from bunyan_encoder.levels import JulLevel, Log4j2Level, Log4jLevel

LONG_MESSAGE = "0123456789 " * 2458


def _failure():
    try:
        raise RuntimeError("A runtime exception")
    except RuntimeError as exc:
        return exc


def demo_stdlib():
    log = logging.getLogger("demo")
    log.debug("Debug log")
    log.info("Info log")
    log.warning("Warn log")
    log.error("Error log")
    log.critical("Fatal log")
    log.error(LONG_MESSAGE)
    try:
        raise RuntimeError("A runtime exception")
    except RuntimeError:
        log.exception("An exception")


def demo_flavors(out):
    now = time.time_ns() // 1_000_000
    thread = threading.current_thread()
    exc = _failure()

    jul = JulAdapter()
    for level in (JulLevel.FINEST, JulLevel.FINE, JulLevel.CONFIG, JulLevel.INFO,
                  JulLevel.WARNING, JulLevel.SEVERE):
        out.write(jul.encode(JulRecord(level, "demo.jul", f"{level.name} log", now,
                                       threading.get_ident(), "demo.Demo")))
    out.write(jul.encode(JulRecord(JulLevel.SEVERE, "demo.jul", "An exception", now,
                                   threading.get_ident(), "demo.Demo", exc)))

    log4j = Log4jAdapter()
    for level in (Log4jLevel.TRACE, Log4jLevel.DEBUG, Log4jLevel.INFO, Log4jLevel.WARN,
                  Log4jLevel.ERROR, Log4jLevel.FATAL):
        out.write(log4j.encode(Log4jEvent(level, "demo.log4j", f"{level.name} log", now,
                                          thread.name)))
    out.write(log4j.encode(Log4jEvent(Log4jLevel.ERROR, "demo.log4j", "An exception", now,
                                      "pool-3-thread-7", exc)))

    log4j2 = Log4j2Adapter()
    for level in (Log4j2Level.TRACE, Log4j2Level.DEBUG, Log4j2Level.INFO, Log4j2Level.WARN,
                  Log4j2Level.ERROR, Log4j2Level.FATAL):
        out.write(log4j2.encode(Log4j2Event(level, "demo.log4j2", f"{level.name} log", now,
                                            threading.get_ident(), "demo.Demo")))
    out.write(log4j2.encode(Log4j2Event(Log4j2Level.ERROR, "demo.log4j2", LONG_MESSAGE, now,
                                        threading.get_ident(), "demo.Demo")))
    out.flush()


def main():
    parser = argparse.ArgumentParser(description="Bunyan encoder demo")
    parser.add_argument("--config", default=None, help="Path to YAML config file")
    args = parser.parse_args()

    config = load_config(load_yaml_config(args.config))
    configure_logging(config)

    demo_stdlib()
    demo_flavors(sys.stdout)


if __name__ == "__main__":
    main()
