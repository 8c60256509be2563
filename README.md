# modbase

Building blocks for tools that manage game mods: parsing and comparing
mod version strings, decoding text files of unknown encoding, directory
and file helpers, combining the progress of several tasks, remembering a
user's answers to questions, and locating Steam game installs.

The package has no dependencies outside the standard library.

## Installation

```
pip install modbase
```

To run the test suite:

```
pip install "modbase[test]"
pytest
```

## Modules

### `modbase.versioninfo`

`VersionInfo`, `VersionScheme` and `ReleaseType`.

- `VersionInfo(major, minor, subminor, subsubminor=0, release_type=ReleaseType.FINAL)`
  builds a regular version; `VersionInfo.invalid()` an invalid one.
- `VersionInfo.parse(text, scheme=VersionScheme.DISCOVER, manual_input=False)`
  reads strings such as `1.2.3rc1`, `v2.05`, `n1.0.1` or `d2020.4.1`.
  A leading `f`, `n` or `d` selects the decimal, numbers-and-letters or
  date scheme unless `manual_input` is true; a leading `v` is dropped;
  `alpha`, `beta`, `prealpha`, `rc` (and `a`/`b` straight after the
  number) set the release type. An empty string gives an invalid version.
- Versions compare with `<`, `<=`, `>`, `>=` and `==`. Invalid versions
  sort first, date versions below all others, and a decimal scheme on
  either side compares as decimal numbers.
- `canonical_string()` gives a string that parses back to the same
  version; `display_string(forced_version_segments=2)` gives one for
  users (`str()` uses it); `as_version_tuple()` gives the leading numbers
  with trailing zeros dropped. `is_valid()`, `scheme()` and `clear()`
  do what their names say.

```python
from modbase.versioninfo import VersionInfo

assert VersionInfo.parse("1.0.0rc1") < VersionInfo.parse("1.0.0")
print(VersionInfo.parse("v2.1b").display_string())   # 2.1beta
print(VersionInfo.parse("1.2.3").canonical_string())  # 1.2.3.0
```

### `modbase.textio`

- `decode_text_data(data)` decodes bytes, trying UTF-8 first, then a
  byte-order mark, then UTF-16 (when the text holds NULs) or the locale's
  encoding. It returns a `DecodedText` with `text`, `encoding` and
  `had_bom`; a leading BOM is removed from the text.
- `read_file_text(path)` does the same for a file; an unreadable file
  gives empty text with `encoding` set to `None`.
- `iter_file_lines(path)` yields the stripped, non-empty lines of a UTF-8
  file, skipping lines that start with `#`.

```python
from modbase.textio import decode_text_data

decoded = decode_text_data(b"\xef\xbb\xbfhello")
assert (decoded.text, decoded.encoding, decoded.had_bom) == ("hello", "UTF-8", True)
```

### `modbase.fileops`

- `remove_dir(path)` removes a directory tree, clearing read-only flags.
- `copy_dir(source, destination, merge=False)` copies a tree and returns
  `False` if the source is missing or the destination exists without
  `merge`; existing files are left alone and directory symlinks are not
  followed.
- `move_file_recursive(source, base_dir, destination)` and
  `copy_file_recursive(source, base_dir, destination)` place a file at
  `base_dir/destination`, creating directories; they never overwrite.
- `remove_old_files(path, pattern, num_to_keep, sort_key=None)` deletes
  matching files beyond `num_to_keep` (newest kept by default) and returns
  the deleted paths.
- `delete_quiet(path)` deletes a file, clearing a read-only flag if needed.

Failures raise `FileOperationError`, a subclass of `OSError`.

### `modbase.taskprogress`

`TaskProgressManager(clock=None)` hands out task ids with `next_id()`,
records `update_progress(task_id, value, maximum)` (a task reaching its
maximum is forgotten), drops tasks with `forget(task_id)`, and reports
`overall()` as `(done, total)` in percent points, or `None` when nothing
is running. Tasks without an update for 15 seconds are dropped.

```python
from modbase.taskprogress import TaskProgressManager

progress = TaskProgressManager()
task = progress.next_id()
progress.update_progress(task, 50, 200)
assert progress.overall() == (25, 100)
```

### `modbase.choicememory`

`StandardButton`, `Choice` and the functions `set_callbacks`,
`get_memory`, `set_window_memory`, `set_file_memory`, `query` and
`button_to_string`. The storage of remembered answers is supplied through
`set_callbacks(get, set_window, set_file)`. `query(window_name, ask,
file_name=None)` returns a remembered answer, or calls `ask()` for a
`Choice` and stores it per window or per file as the choice requests
(never when the answer is `CANCEL`).

```python
from modbase.choicememory import Choice, StandardButton, query, set_callbacks

memory = {}
set_callbacks(
    lambda window, file: memory.get((window, file), StandardButton.NO_BUTTON),
    lambda window, button: memory.__setitem__((window, ""), button),
    lambda window, file, button: memory.__setitem__((window, file), button),
)
assert query("overwrite", lambda: Choice(StandardButton.YES, remember=True)) == StandardButton.YES
assert query("overwrite", lambda: Choice(StandardButton.NO)) == StandardButton.YES
```

### `modbase.steam`

- `find_steam()` reads Steam's path from the Windows registry, or returns
  `""` elsewhere.
- `parse_library_folders(text)` lists the library paths of a
  `libraryfolders.vdf` text.
- `find_steam_game(app_name, valid_file="", steam_path=None)` searches
  every library for `steamapps/common/<app_name>` and returns its path,
  or `""`.

## What the package does not do

There are no dialogs or other user interface: questions are answered by
the `ask` callable you pass to `query`. The package has no
human-readable byte-size or time formatting, no natural-order string
sorting, no atomic write-then-replace file helper, no scope-exit or timing
helpers and no tutorial management, and it provides no command-line tool.