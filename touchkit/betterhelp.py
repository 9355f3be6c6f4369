'''
betterhelp renders the help text for programs whose flags are scanned by hand
instead of by argparse. The program describes its flags as a list of Flag
objects, and betterhelp takes care of the layout, the colors, and the
epilogues that other modules register.
'''
try:
    import colorama
except ImportError:
    colorama = None
import os
import re
import sys
import textwrap

from touchkit import pipeable

HELP_ARGS = {'-h', '--help'}

# Modules can add additional helptexts to this set, and they will appear
# after the program's main helptext. This is used when a module intercepts
# sys.argv to change program behavior beyond the flags the program itself
# knows about. For example, vlogging.main_decorator adds --debug etc.
HELPTEXT_EPILOGUES = set()

class Flag:
    def __init__(self, names, help, *, metavar=None):
        if isinstance(names, str):
            names = [names]
        self.names = list(names)
        self.help = help
        self.metavar = metavar

    def __repr__(self):
        return f'Flag({self.names})'

    def invocations(self):
        if self.metavar is None:
            return list(self.names)
        return [f'{name}={self.metavar}' for name in self.names]

def get_colors(do_colors):
    # Even though helptext may go out on stderr, we only colorize it if both
    # stdout and stderr are tty because as soon as pipe buffers are involved,
    # even on stdout, things start to get weird.
    if do_colors and colorama and pipeable.stdout_tty() and pipeable.stderr_tty():
        colorama.init()
        return {
            'positional': colorama.Style.BRIGHT + colorama.Fore.CYAN,
            'flag': colorama.Style.BRIGHT + colorama.Fore.MAGENTA,
            'reset': colorama.Style.RESET_ALL,
        }
    return {'positional': '', 'flag': '', 'reset': ''}

def get_program_name():
    program_name = os.path.basename(sys.argv[0])
    program_name = re.sub(r'\.pyw?$', '', program_name)
    return program_name

def equals_header(text):
    return text + '\n' + ('=' * len(text))

def make_helptext(
        flags,
        *,
        description=None,
        do_colors=True,
        examples=None,
        positional=None,
        program_name=None,
    ):
    '''
    flags:
        A list of Flag.

    positional:
        A Flag describing the bare arguments, shown in the invocation line.

    examples:
        A list of argument strings, each rendered as "> program args".
    '''
    color = get_colors(do_colors)

    if program_name is None:
        program_name = get_program_name()

    flag_names = set(HELP_ARGS)
    for flag in flags:
        flag_names.update(flag.names)

    def colorize_names(text):
        # Longest first so that --reference is not colored as -r + eference.
        for name in sorted(flag_names, key=len, reverse=True):
            text = re.sub(
                rf'((?:^|(?<=\s)){re.escape(name)}\b)',
                rf'{color["flag"]}\1{color["reset"]}',
                text,
            )
        return text

    main_invocation = [program_name]
    if flags:
        main_invocation.append(f'{color["flag"]}[flags]{color["reset"]}')
    if positional is not None:
        for name in positional.names:
            main_invocation.append(f'{color["positional"]}{name} [{name}, ...]{color["reset"]}')
    main_invocation = '> ' + ' '.join(main_invocation)

    argument_helps = []
    all_flags = ([positional] if positional is not None else []) + list(flags)
    for flag in all_flags:
        kind = 'positional' if flag is positional else 'flag'
        inv = '\n'.join(f'{color[kind]}{name}{color["reset"]}' for name in flag.invocations())
        arghelp = textwrap.dedent(flag.help).strip()
        arghelp = colorize_names(arghelp)
        arghelp = textwrap.indent(arghelp, '    ')
        argument_helps.append(f'{inv}\n{arghelp}')

    description = textwrap.dedent(description or '').strip()
    description = colorize_names(description)

    example_invocations = []
    for example in examples or []:
        example_invocations.append(f'> {program_name} {colorize_names(example)}')
    if example_invocations:
        example_invocations = 'Examples:\n' + '\n'.join(example_invocations)
    else:
        example_invocations = ''

    parts = [
        equals_header(program_name),
        description,
        main_invocation,
        '\n\n'.join(argument_helps),
        example_invocations,
    ]
    parts = [part.strip() for part in parts if part]
    return '\n\n'.join(part for part in parts if part)

def full_helptext(text):
    '''
    Join the given text with any epilogues added by other modules.
    '''
    fulltext = [text.strip()]
    epilogues = {textwrap.dedent(epi).strip() for epi in HELPTEXT_EPILOGUES}
    fulltext.extend(sorted(epilogues))
    separator = '\n' + ('-' * 80) + '\n'
    return separator.join(fulltext)

def print_helptext(text, *, stream=None) -> None:
    '''
    Print the helptext and epilogues to stderr, or to stdout if
    stream is pipeable.stdout.
    '''
    stream = stream or pipeable.stderr
    stream(full_helptext(text))
