'''
touch
=====

Create the files that don't exist, and update the access and modification
timestamps of the ones that do.

Each path argument may be a literal path or a glob pattern. A pattern that
matches nothing is taken as the literal name of a new file, which is how
`touch newfile.txt` creates newfile.txt.
'''
import collections
import os
import stat
import sys

from touchkit import betterhelp
from touchkit import pipeable
from touchkit import timetools
from touchkit import vlogging
from touchkit import walker
from touchkit import winglob

log = vlogging.get_logger(__name__, main_fallback='touchkit')

__version__ = '0.1.0'

HELP = 'help'
VERSION = 'version'
TOUCH = 'touch'

END_OF_FLAGS = '--'
REFERENCE_PREFIXES = ('-r=', '--reference=')

class TouchException(Exception):
    pass

class ConflictingTimeFlags(TouchException):
    def __init__(self):
        self.args = ('Access time only and modified time only flags are mutually exclusive.',)

class NoFilesResolved(TouchException):
    def __init__(self):
        self.args = ('No files to touch.',)

class ReferenceFileMissing(TouchException):
    def __init__(self):
        self.args = ('Reference file not provided.',)

class ReferenceFileNotFound(TouchException):
    def __init__(self, path):
        self.path = path
        self.args = (f'Reference file {path} not found.',)

class UnknownArgument(TouchException):
    def __init__(self, arg):
        self.arg = arg
        self.args = (f'Unknown argument {arg}.',)

_TouchConfig = collections.namedtuple(
    'TouchConfig',
    ['recursive', 'create', 'access_only', 'modified_only', 'times'],
)

class TouchConfig(_TouchConfig):
    '''
    The settings for one run. Build it with TouchConfig.new so that the times
    default to now, and use _replace to derive variations.
    '''
    __slots__ = ()

    @classmethod
    def new(
            cls,
            *,
            recursive=False,
            create=True,
            access_only=False,
            modified_only=False,
            times=None,
        ):
        if times is None:
            times = timetools.now_pair()
        return cls(
            recursive=recursive,
            create=create,
            access_only=access_only,
            modified_only=modified_only,
            times=times,
        )

    def assert_valid(self):
        if self.access_only and self.modified_only:
            raise ConflictingTimeFlags()

ScanResult = collections.namedtuple('ScanResult', ['action', 'config', 'patterns'])

class FileNameSet:
    '''
    The unique paths to be touched, kept in the order they were first added.
    '''
    def __init__(self, paths=None):
        self._paths = {}
        if paths is not None:
            self.extend(paths)

    def __contains__(self, path):
        return path in self._paths

    def __iter__(self):
        return iter(list(self._paths))

    def __len__(self):
        return len(self._paths)

    def __repr__(self):
        return f'FileNameSet({list(self._paths)})'

    def add(self, path):
        self._paths[path] = True

    def extend(self, paths):
        for path in paths:
            self.add(path)

# ARGUMENT SCANNING
################################################################################

def read_reference(path):
    '''
    Return the TimePair of the reference file, or raise
    ReferenceFileMissing / ReferenceFileNotFound.
    '''
    if path == '':
        raise ReferenceFileMissing()

    try:
        times = timetools.read_file_times(path)
    except OSError as exc:
        raise ReferenceFileNotFound(path) from exc

    log.debug('Using times from reference file %s: %s.', path, timetools.render_pair(times))
    return times

def scan_arguments(argv, *, now=None) -> ScanResult:
    '''
    Walk the arguments once, left to right, and return a ScanResult.

    -h and -v stop the scan as soon as they are seen, even if later arguments
    would have been invalid. Everything else is checked in order, so an
    unknown flag or a bad reference file raises before any later argument is
    looked at. The -a / -m conflict is checked once the scan is complete.
    '''
    config = TouchConfig.new(times=now)
    patterns = []
    flags_ended = False

    index = 0
    while index < len(argv):
        arg = argv[index]
        index += 1

        if flags_ended or not arg.startswith('-'):
            patterns.append(arg)

        elif arg == END_OF_FLAGS:
            flags_ended = True

        elif arg in ('-h', '--help'):
            return ScanResult(HELP, config, patterns)

        elif arg in ('-v', '--version'):
            return ScanResult(VERSION, config, patterns)

        elif arg in ('-R', '--recursive'):
            config = config._replace(recursive=True)

        elif arg in ('-c', '--no-create'):
            config = config._replace(create=False)

        elif arg == '-m':
            config = config._replace(modified_only=True)

        elif arg == '-a':
            config = config._replace(access_only=True)

        elif arg.startswith(REFERENCE_PREFIXES):
            reference = arg.split('=', 1)[1]
            # Some shells, PowerShell in particular, split "-r=file" into
            # "-r=" and "file".
            if reference == '' and index < len(argv):
                reference = argv[index]
                index += 1
            config = config._replace(times=read_reference(reference))

        else:
            raise UnknownArgument(arg)

    config.assert_valid()
    return ScanResult(TOUCH, config, patterns)

# NAME COLLECTION
################################################################################

def expand_pattern(pattern):
    '''
    Return the paths matching the glob pattern, or [pattern] if there are
    none so that it can be created as a new file.

    Raises winglob.BadPattern.
    '''
    if not winglob.is_glob(pattern):
        return [pattern]

    matches = winglob.glob(pattern)
    if not matches:
        return [pattern]
    return matches

def collect_names(patterns, names=None):
    '''
    Expand every pattern into one FileNameSet. Malformed patterns are logged
    and skipped.
    '''
    if names is None:
        names = FileNameSet()

    for pattern in patterns:
        try:
            matches = expand_pattern(pattern)
        except winglob.BadPattern as exc:
            log.error(exc)
            continue
        names.extend(matches)

    return names

def is_directory(path):
    try:
        return stat.S_ISDIR(os.stat(path).st_mode)
    except FileNotFoundError:
        log.warning('%s does not exist, so it is not a directory.', path)
        return False
    except OSError as exc:
        log.error('Could not stat %s: %s', path, exc)
        return False

def expand_directories(names):
    '''
    Add the complete tree of every directory currently in names. Directories
    found along the way are added too, but are not treated as new roots.
    '''
    def callback_error(exc):
        log.error('Could not walk %s: %s', exc.filename, exc)

    roots = [path for path in names if is_directory(path)]
    for root in roots:
        log.debug('Walking %s.', root)
        names.extend(walker.walk(root, callback_error=callback_error))

    return names

# TOUCHING
################################################################################

def create_file(path):
    try:
        with open(path, 'a'):
            pass
    except OSError as exc:
        log.error('Could not create %s: %s', path, exc)
        return False

    log.loud('Created %s.', path)
    return True

def target_times(path, config):
    '''
    Return the TimePair that should be applied to the existing file at path.

    With access_only the file keeps its modification time. With
    modified_only the access time is set from the file's current
    modification time, because that is the only time read_file_times reads.
    If the current times cannot be read, the defaults are used as they are.
    '''
    (accessed, modified) = config.times

    if not (config.access_only or config.modified_only):
        return timetools.TimePair(accessed, modified)

    try:
        current = timetools.read_file_times(path)
    except OSError as exc:
        log.error('Could not read times of %s: %s', path, exc)
        return timetools.TimePair(accessed, modified)

    if config.access_only:
        modified = current.modified
    elif config.modified_only:
        accessed = current.accessed

    return timetools.TimePair(accessed, modified)

def touch_file(path, config) -> bool:
    '''
    Create the file if it doesn't exist and config.create is True, or update
    its times if it does. Errors are logged, never raised.

    Return True if the file was created or its times were updated.
    '''
    try:
        os.stat(path)
    except FileNotFoundError:
        if not config.create:
            log.loud('Not creating %s.', path)
            return False
        return create_file(path)
    except OSError as exc:
        log.error('Could not stat %s: %s', path, exc)
        return False

    times = target_times(path, config)
    try:
        os.utime(path, ns=(times.accessed, times.modified))
    except OSError as exc:
        log.error('Could not set times of %s: %s', path, exc)
        return False

    log.loud('Touched %s.', path)
    return True

def touch_all(names, config) -> int:
    '''
    Touch every path once and return how many succeeded.
    '''
    return sum(touch_file(path, config) for path in names)

def run(config, patterns):
    '''
    Collect the names from the patterns, expand directories if the config is
    recursive, and touch them all.

    Raises NoFilesResolved if nothing was collected.
    '''
    config.assert_valid()

    names = collect_names(pipeable.input_many(patterns))

    if config.recursive:
        expand_directories(names)

    if len(names) == 0:
        raise NoFilesResolved()

    log.debug('Touching %d paths.', len(names))
    touched = touch_all(names, config)
    log.debug('Touched %d of %d paths.', touched, len(names))
    return 0

# COMMAND LINE
################################################################################

FLAGS = [
    betterhelp.Flag(
        ['-h', '--help'],
        help='''
        Show this help text and exit.
        ''',
    ),
    betterhelp.Flag(
        ['-v', '--version'],
        help='''
        Show the version number and exit.
        ''',
    ),
    betterhelp.Flag(
        ['-R', '--recursive'],
        help='''
        Any directory in the paths is walked, and every file and directory
        inside it is touched too.
        ''',
    ),
    betterhelp.Flag(
        ['-c', '--no-create'],
        help='''
        Do not create files that don't exist.
        ''',
    ),
    betterhelp.Flag(
        '-m',
        help='''
        Only change the modification time.
        ''',
    ),
    betterhelp.Flag(
        '-a',
        help='''
        Only change the access time. Cannot be used with -m.
        ''',
    ),
    betterhelp.Flag(
        ['-r', '--reference'],
        metavar='FILE',
        help='''
        Use the modification time of FILE instead of the current time.
        If your shell splits the argument at the =, the file may also be
        given as the next argument.
        ''',
    ),
]

POSITIONAL = betterhelp.Flag(
    'paths',
    help='''
    Literal paths or glob patterns. A pattern that matches nothing is created
    as a new file. Use !c to read paths from the clipboard or !i to read
    them from stdin, one per line. Arguments after -- are always paths.
    ''',
)

DESCRIPTION = '''
Create the files that don't exist, and update the access and modification
timestamps of the ones that do.
'''

EXAMPLES = [
    'newfile.txt',
    '*.txt -c',
    '-R build',
    '-r=reference.txt -m *.log',
]

def helptext(program_name=None):
    do_colors = os.environ.get('NO_COLOR', None) is None
    return betterhelp.make_helptext(
        FLAGS,
        description=DESCRIPTION,
        do_colors=do_colors,
        examples=EXAMPLES,
        positional=POSITIONAL,
        program_name=program_name,
    )

@pipeable.ctrlc_return1
@vlogging.main_decorator
def main(argv):
    if len(argv) == 0:
        betterhelp.print_helptext(helptext())
        return 1

    try:
        scan = scan_arguments(argv)
        if scan.action == HELP:
            betterhelp.print_helptext(helptext(), stream=pipeable.stdout)
            return 0

        if scan.action == VERSION:
            pipeable.stdout(f'{betterhelp.get_program_name()} version {__version__}')
            return 0

        return run(scan.config, scan.patterns)

    except TouchException as exc:
        log.critical(exc)
        return 1

def main_cli():
    raise SystemExit(main(sys.argv[1:]))

if __name__ == '__main__':
    raise SystemExit(main(sys.argv[1:]))
