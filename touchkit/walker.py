import collections
import os

from touchkit import vlogging

log = vlogging.get_logger(__name__)

def walk(
        path,
        *,
        callback_error=None,
        sort=True,
        yield_root=True,
    ):
    '''
    Yield path strings for everything in the tree under path: files,
    directories, and anything else the directory listing contains, such as
    symlinks, which are yielded but never followed.

    The paths are built by joining entry names onto `path` exactly as it was
    given, so a relative starting point yields relative paths.

    callback_error:
        If an OSError occurs while listing a directory, your function will be
        called with the exception object as the only argument and the walk
        moves on to the remaining directories. Without a callback the
        exception is raised.

    sort:
        If True, entries are yielded in sorted order. Otherwise, they come in
        whatever order the filesystem returns them.

    yield_root:
        If True, `path` itself is the first item yielded.

    Raises NotADirectoryError if the starting path is not a directory, unless
    callback_error is given, in which case the callback receives it.
    '''
    if yield_root:
        yield path

    queue = collections.deque()
    queue.append(path)
    while queue:
        current = queue.pop()
        log.loud('Scanning %s.', current)
        current_rstrip = current.rstrip(os.sep)

        try:
            entries = list(os.scandir(current))
        except OSError as exc:
            if callback_error is not None:
                callback_error(exc)
                continue
            else:
                raise

        if sort:
            entries = sorted(entries, key=lambda e: e.name)

        # The stack pops the last directory first, which would walk the
        # children in reverse. appendleft onto more_queue so that popping
        # from the main queue restores the forward order.
        more_queue = collections.deque()
        for entry in entries:
            child = f'{current_rstrip}{os.sep}{entry.name}'
            yield child

            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError as exc:
                if callback_error is not None:
                    callback_error(exc)
                    continue
                raise

            if is_dir:
                more_queue.appendleft(child)

        queue.extend(more_queue)
