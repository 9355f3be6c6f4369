'''
On Windows, square brackets do not have a special meaning in glob strings.
However, python's glob module is written for unix-style globs in which brackets
represent character classes / ranges.

So on Windows this module escapes the brackets before globbing, and on Linux
it leaves them alone but checks that every character class is terminated,
because python's glob would otherwise quietly treat a stray bracket as a
literal and the user would never find out their pattern was wrong.

Unlike glob.glob, hidden files are matched by wildcards the same way as any
other file, and results come back sorted.
'''
import glob as python_glob
import os
import re

if os.name == 'nt':
    GLOB_SYMBOLS = {'*', '?'}
else:
    GLOB_SYMBOLS = {'*', '?', '['}

class BadPattern(ValueError):
    def __init__(self, pattern, reason):
        self.pattern = pattern
        self.reason = reason
        self.args = (f'Bad glob pattern {repr(pattern)}: {reason}.',)

def fix(pattern):
    if os.name == 'nt':
        pattern = re.sub(r'(\[|\])', r'[\1]', pattern)
    return pattern

def glob(pathname):
    '''
    Return the sorted list of paths matching the pattern, which may be empty.

    Raises BadPattern if the pattern is malformed.
    '''
    pathname = fix(pathname)
    validate(pathname)
    return sorted(python_glob.glob(pathname, include_hidden=True))

def is_glob(pattern):
    return len(set(pattern).intersection(GLOB_SYMBOLS)) > 0

def validate(pattern):
    '''
    Raise BadPattern if the pattern contains a character class that is never
    closed. The class syntax follows fnmatch: a ] immediately after the [ or
    after the ! negation is a literal member of the class, not its end.

    Patterns that went through `fix` on Windows always pass because every
    bracket has been wrapped into a complete class.
    '''
    index = 0
    length = len(pattern)
    while index < length:
        if pattern[index] != '[':
            index += 1
            continue

        close = index + 1
        if close < length and pattern[close] == '!':
            close += 1
        if close < length and pattern[close] == ']':
            close += 1
        while close < length and pattern[close] != ']':
            close += 1

        if close >= length:
            raise BadPattern(pattern, f'unterminated character class at index {index}')

        index = close + 1
