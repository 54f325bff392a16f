# be20kit

Small, dependency-free building blocks for tools that scan disk images and
other bulk data for features.

## Modules

- `be20kit.timer`: `Timer`, a stopwatch that accumulates time over several
  `start()`/`stop()` cycles (`lap()` stops and restarts it). It reports
  `elapsed_seconds()`, `elapsed_text()` and estimates of the time left from a
  fraction done: `eta()` (seconds, or -1 when it cannot tell), `eta_text()`
  (`h:mm:ss` or `n/a`), `eta_time()` and `eta_date()` (local clock time of
  completion). Starting a running timer or stopping a stopped one raises
  `RuntimeError`. Also `hms_str`, `hms_ns_str` and `now_str`.
- `be20kit.atomic`: `AtomicMap`, a locked map that creates missing values with
  a factory on first `map[key]` access, raises `KeyError` from `get()` for
  absent keys and from `insert()` for present ones, and returns `keys()`,
  `values()` and `items()` (as `MapItem`s) in key order; `AtomicSet`, a locked
  set with `check_for_presence_and_insert()` and
  `check_for_presence_and_erase()`.
- `be20kit.char_class`: `CharClass`, which counts digits, hex letters and
  other letters in a byte value, a string or a byte sequence.
- `be20kit.unicode_escape`: `validate_or_escape_utf8` escapes control
  characters, backslashes and bad UTF-8 bytes as `\ooo` octal (or raises
  `BadUnicode` when validating); `looks_like_utf16` returns
  `(is_utf16, little_endian)`; `convert_utf16_to_utf8` decodes UTF-16 and
  drops NULs (raising `InvalidUTF16` when the data does not look like UTF-16);
  `make_utf8` produces safe text from either encoding; plus conversions
  between UTF-8 bytes, UTF-16 code-unit lists and UTF-32 strings.
- `be20kit.utils`: string helpers (`starts_with`, `ends_with`, `split`,
  `truncate_at`, `valid_ascii_name`, `ishexnumber`), `value_from_string`,
  `getenv_debug`, size parsing with k/m/g/t suffixes (`scaled_stoi64`),
  timestamp conversion (`unix_time_to_iso`, `microsoft_date_to_iso`), file and
  directory helpers (`get_lines`, `get_last`, `named_temporary_directory`,
  `directory_empty`) and `subprocess_call`, which runs a shell command and
  returns its output.
- `be20kit.machine_stats`: `get_cpu_percentage()` (read from `ps`; NaN if it
  cannot be parsed), `get_available_memory()` (from `/proc/meminfo`, else 0)
  and `get_memory()` returning `(virtual_size, resident_size)` from
  `/proc/self/statm`, else zeros.
- `be20kit.packet`: `PacketInfo` reads Ethernet, IPv4, IPv6 and TCP header
  fields from captured frames, raising `FrameTooShort` when the data is too
  short; `OnesComplementSum` computes Internet checksums; `EtherType` and
  `nshort`.
- `be20kit.thread_pool`: `ThreadPool` with `push_task`, `submit` (returning a
  `concurrent.futures.Future`), `parallelize_loop`, `reset`, `wait_for_tasks`,
  a `paused` flag and context-manager shutdown; plus `SyncedStream` and
  `Stopwatch`.
- `be20kit.context_list`: `WordAndContextList`, a stop list that matches
  features by exact word, by surrounding context, or by regular expression,
  loaded with `readfile()` or built with `add_fc()` and `add_regex()`; also
  `Context`, `extract_before_after`, `rstrcmp` and `has_metachars`.

## Install

    pip install .

## Examples

    from be20kit.utils import scaled_stoi64
    scaled_stoi64("4m")            # 4194304

    from be20kit.unicode_escape import validate_or_escape_utf8
    validate_or_escape_utf8(b"backslash=\\", False, True, False)   # b"backslash=\\134"

    from be20kit.thread_pool import ThreadPool
    with ThreadPool(4) as pool:
        future = pool.submit(pow, 2, 10)
        print(future.result())     # 1024

    from be20kit.context_list import WordAndContextList
    stop = WordAndContextList()
    stop.add_fc("word1", "")
    stop.check("word1", "", "")    # True

## What it does not do

be20kit is a library only. It has no command-line program, and it does not
itself read disk images, run scanners or write feature and histogram files;
it supplies the pieces such a tool is built from.

## Tests

    pip install .[test]
    pytest