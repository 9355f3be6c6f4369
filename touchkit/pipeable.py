'''
This module lets path arguments come from the clipboard or from stdin instead
of the command line.

Rather than guessing from whether stdin is a pipe, the user opts in explicitly:
a path argument of !i reads one path per line from stdin, and !c reads one
path per line from the clipboard. Any other argument is returned as it is.
'''
# import pyperclip moved to stay lazy.
import functools
import sys

CLIPBOARD_STRINGS = ['!c', '!clip', '!clipboard']
INPUT_STRINGS = ['!i', '!in', '!input', '!stdin']
EOF = '\x1a'

def ctrlc_return1(function):
    '''
    Apply this decorator to your main function, and if the user presses
    ctrl+c then main will return 1 as its status code without the stacktrace
    appearing.
    '''
    @functools.wraps(function)
    def wrapped(*args, **kwargs):
        try:
            return function(*args, **kwargs)
        except KeyboardInterrupt:
            return 1
    return wrapped

def _multi_line_input():
    while True:
        line = sys.stdin.readline()
        parts = line.split(EOF)
        line = parts[0]
        has_eof = len(parts) > 1

        # An empty string here means the stream ended or EOF was the first
        # character of the line. A blank line still has its \n.
        if line == '':
            break

        yield line.rstrip('\n')

        if has_eof:
            break

def input(arg):
    '''
    Resolve a single argument into a list of path strings.

    !c and friends take the lines of the clipboard, !i and friends take the
    lines of stdin until EOF. Lines are stripped and blank lines are skipped.
    Anything else is returned as a one-item list, untouched, so that a path
    with leading or trailing spaces survives.

    Resolution is not recursive: if the clipboard contains "!i", it is taken
    as a filename.
    '''
    if not isinstance(arg, str):
        raise TypeError(f'arg should be {str}, not {type(arg)}.')

    arg_lower = arg.lower()

    if arg_lower in INPUT_STRINGS:
        lines = _multi_line_input()

    elif arg_lower in CLIPBOARD_STRINGS:
        import pyperclip
        lines = pyperclip.paste().splitlines()

    else:
        return [arg]

    lines = (line.strip() for line in lines)
    return [line for line in lines if line]

def input_many(args):
    '''
    Given a list of arguments, yield the input() results for all of them.
    '''
    for arg in args:
        yield from input(arg)

def output(stream, line, *, end):
    line = str(line)
    stream.write(line)
    if not line.endswith(end):
        stream.write(end)
    if stream.isatty():
        stream.flush()

def stdout(line='', end='\n'):
    # In pythonw, stdout is None.
    if sys.stdout is not None:
        output(sys.stdout, line, end=end)

def stderr(line='', end='\n'):
    # In pythonw, stderr is None.
    if sys.stderr is not None:
        output(sys.stderr, line, end=end)

def stdout_tty():
    if sys.stdout is not None and sys.stdout.isatty():
        return sys.stdout

def stderr_tty():
    if sys.stderr is not None and sys.stderr.isatty():
        return sys.stderr
