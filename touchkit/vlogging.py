'''
vlogging
========

This module forwards everything from logging, with the addition of the LOUD
level, which sits below DEBUG and is used for per-file chatter. Every logger
from get_logger is given the `loud` method.

Applications decorate their main with main_decorator so the user can pick a
level with --loud, --debug, --warning, --quiet or --silent without the
application's own argument scanner knowing about those flags.
'''
from logging import *

from touchkit import betterhelp

_getLogger = getLogger

# The root logger itself has no level, so the handlers decide what they want.
# Python's default of WARNING would stop a DEBUG handler from ever seeing
# anything.
root = getLogger()
root.setLevel(NOTSET)

LOUD = 1
SILENT = 99999999999

LEVEL_ARGS = {
    '--loud': LOUD,
    '--debug': DEBUG,
    '--warning': WARNING,
    '--quiet': ERROR,
    '--silent': SILENT,
}

BETTERHELP_EPILOGUE = '''
This program uses vlogging. The following flags control the log level:

--loud: show every file as it is touched.
--debug: show a summary of what was collected.
--warning: only show warnings and errors.
--quiet: only show errors.
--silent: show nothing at all.
'''

def add_loud(log):
    '''
    Add the `loud` method to the given logger.
    '''
    def loud(self, message, *args, **kwargs):
        if self.isEnabledFor(LOUD):
            self._log(LOUD, message, args, **kwargs)

    addLevelName(LOUD, 'LOUD')
    log.loud = loud.__get__(log, log.__class__)

def basic_config(level):
    '''
    Put a stderr handler with the given level on the root logger, unless the
    root logger already has handlers.
    '''
    if root.handlers:
        return

    handler = StreamHandler()
    handler.setFormatter(Formatter('{levelname}:{name}:{message}', style='{'))
    handler.setLevel(level)
    root.addHandler(handler)

def get_level_by_argv(argv):
    '''
    Return (level, argv) where argv is a copy of the input with the first
    level flag removed. Only the first flag found in LEVEL_ARGS counts, the
    rest are left alone. INFO if none are present.
    '''
    argv = list(argv)
    for (arg, level) in LEVEL_ARGS.items():
        if arg in argv:
            argv.remove(arg)
            return (level, argv)
    return (INFO, argv)

def get_logger(name=None, main_fallback=None):
    '''
    When a module is run directly its __name__ is "__main__", which looks
    wrong in the log output. main_fallback is the name to use instead.
    '''
    if name == '__main__' and main_fallback is not None:
        name = main_fallback
    log = _getLogger(name)
    add_loud(log)
    return log

getLogger = get_logger

def main_decorator(main):
    '''
    Strip the level flags out of argv, put a handler on the root logger at
    that level, and call main with the remaining argv.
    '''
    betterhelp.HELPTEXT_EPILOGUES.add(BETTERHELP_EPILOGUE)

    def wrapped(argv):
        argv = main_level_by_argv(argv)
        return main(argv)
    return wrapped

def main_level_by_argv(argv):
    (level, argv) = get_level_by_argv(argv)
    basic_config(level)
    return argv
