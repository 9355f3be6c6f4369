import collections
import datetime
import os
import time

# Both members are integer nanoseconds since the epoch, which is what
# os.utime(ns=...) wants and what os.stat gives back without float rounding.
TimePair = collections.namedtuple('TimePair', ['accessed', 'modified'])

def now_pair():
    now = time.time_ns()
    return TimePair(accessed=now, modified=now)

def fromtimestamp_local(unix_ns):
    return datetime.datetime.fromtimestamp(unix_ns / 1e9).astimezone()

def read_file_times(path):
    '''
    Return the TimePair of an existing file.

    Only the modification time is read, and it is used for both members.
    Callers that want to keep a file's access time as it is will therefore
    get its modification time instead.

    Raises OSError if the file cannot be stat'ed.
    '''
    stat = os.stat(path)
    return TimePair(accessed=stat.st_mtime_ns, modified=stat.st_mtime_ns)

def render_pair(pair):
    accessed = fromtimestamp_local(pair.accessed).isoformat(' ')
    modified = fromtimestamp_local(pair.modified).isoformat(' ')
    return f'accessed={accessed} modified={modified}'
