#
#  This file is part of projgen
#
#  Copyright (C) 2012 GarageGames, LLC
#
#  Permission is hereby granted, free of charge, to any person obtaining a copy
#  of this software and associated documentation files (the "Software"), to
#  deal in the Software without restriction, including without limitation the
#  rights to use, copy, modify, merge, publish, distribute, sublicense, and/or
#  sell copies of the Software, and to permit persons to whom the Software is
#  furnished to do so, subject to the following conditions:
#
#  The above copyright notice and this permission notice shall be included in
#  all copies or substantial portions of the Software.
#
#  THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
#  IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
#  FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
#  AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
#  LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING
#  FROM, OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS
#  IN THE SOFTWARE.
#

import os.path
import sys
import logging
from optparse import OptionParser, OptionGroup
from time import time

# This is needed to initialize colored output on Windows. It must be done
# before any stdout is done.
import clint.packages.colorama
clint.packages.colorama.init()

from clint.textui import colored


class ProjgenFormatter(logging.Formatter):

    def __init__(self):
        logging.Formatter.__init__(self, fmt=logging.BASIC_FORMAT)
        self.format_warning = colored.yellow
        self.format_error = colored.red

    def format(self, record):
        level = record.levelno
        if level == logging.ERROR or level == logging.WARNING or level == logging.INFO:
            msg = ""
            if hasattr(record, "pos") and record.pos:
                msg = "%s: " % record.pos
            if level != logging.INFO:
                msg += "%s: " % record.levelname.lower()
            msg += record.getMessage()
            if level == logging.ERROR:
                msg = str(self.format_error(msg))
            elif level == logging.WARNING:
                msg = str(self.format_warning(msg))
            return msg
        else:
            return logging.Formatter.format(self, record)


logger = logging.getLogger()


def setup_logging(level):
    handler = logging.StreamHandler()
    handler.setFormatter(ProjgenFormatter())
    logger.addHandler(handler)
    logger.setLevel(level)
    return handler


# OptionParser only allows a string version argument; this delays importing
# projgen until --version is actually used.
class ProjgenOptionParser(OptionParser):
    def get_version(self):
        import projgen.version
        return "projgen %s" % projgen.version.get_version()


def create_parser():
    parser = ProjgenOptionParser(usage="%prog [options] ROOT [CONFIG]",
                                 version="projgen")
    parser.add_option(
            "-v", "--verbose",
            action="store_true", dest="verbose", default=False,
            help="show verbose output")
    parser.add_option(
            "", "--dry-run",
            action="store_true", dest="dry_run", default=False,
            help="don't write any files, just pretend to do it")
    parser.add_option(
            "", "--diff-only",
            action="store_true", dest="diff_only", default=False,
            help="only output diffs instead of modifying the files, implies --dry-run")
    parser.add_option(
            "", "--force",
            action="store_true", dest="force", default=False,
            help="touch output files even if they're unchanged")
    parser.add_option(
            "-p", "--platform",
            action="store", dest="platform", default=None,
            metavar="PLATFORM",
            help="generate for given platform (win32, linux, mac; default: host)")
    parser.add_option(
            "-t", "--target",
            action="append", dest="targets",
            metavar="TARGET",
            help="only generate files for the given build target (may be specified more than once)")

    build_group = OptionGroup(parser, "Build Options")
    build_group.add_option(
            "", "--no-tools",
            action="store_false", dest="tool_build", default=True,
            help="generate projects without the editor tools")
    build_group.add_option(
            "", "--demo",
            action="store_true", dest="demo_build", default=False,
            help="generate demo build")
    build_group.add_option(
            "", "--watermark",
            action="store_true", dest="watermark_build", default=False,
            help="generate watermarked build")
    build_group.add_option(
            "", "--dll-runtime",
            action="store_true", dest="dll_runtime", default=False,
            help="link against the DLL version of the C runtime")
    parser.add_option_group(build_group)

    debug_group = OptionGroup(parser, "Debug Options")
    debug_group.add_option(
            "", "--debug",
            action="store_true", dest="debug", default=False,
            help="show debug log")
    debug_group.add_option(
            "", "--dump-model",
            action="store_true", dest="dump", default=False,
            help="dump configured projects to stdout instead of generating output")
    parser.add_option_group(debug_group)
    return parser


def main(argv=None):
    """
    Runs projgen with command line arguments *argv* and returns the exit
    code.
    """
    parser = create_parser()
    options, args = parser.parse_args(sys.argv[1:] if argv is None else argv)

    if len(args) not in (1, 2):
        sys.stderr.write("incorrect number of arguments, build root and optional config expected\n")
        return 3

    if options.diff_only and options.force:
        sys.stderr.write("--diff-only and --force option can't be used together\n")
        return 3

    if options.debug:
        log_level = logging.DEBUG
    elif options.verbose:
        log_level = logging.INFO
    else:
        log_level = logging.WARNING
    handler = setup_logging(log_level)

    # note: we intentionally import projgen this late so that the logging
    # module is already initialized
    import projgen.error
    import projgen.dumper
    import projgen.io
    from projgen.generator import Generator, DEFAULT_CONFIG

    try:
        start_time = time()
        projgen.io.dry_run = options.dry_run
        projgen.io.diff_only = options.diff_only
        projgen.io.force_output = options.force

        gen = Generator(args[0], platform=options.platform)
        if options.targets:
            gen.targets_to_use = set(options.targets)
        gen.set_tool_build(options.tool_build)
        gen.set_demo_build(options.demo_build)
        gen.set_watermark_build(options.watermark_build)
        gen.set_dll_runtime(options.dll_runtime)

        config = args[1] if len(args) > 1 else os.path.join(gen.root_dir, DEFAULT_CONFIG)
        gen.run_script(config)

        if options.dump:
            print(projgen.dumper.dump_generator(gen))
        else:
            gen.generate()
            logger.info("created files: %d, updated files: %d (time: %.1fs)",
                        projgen.io.num_created, projgen.io.num_modified, time() - start_time)
        return 0

    except KeyboardInterrupt:
        if options.debug:
            raise
        return 2
    except IOError as e:
        if options.debug:
            raise
        logging.error(e)
        return 1
    except projgen.error.Error as e:
        if options.debug:
            raise
        logging.error(e.msg, extra={"pos":e.pos})
        return 1
    finally:
        logger.removeHandler(handler)
