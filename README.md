# oskit

Classic operating-systems exercises as a small Python package with
command-line front ends:

- **Sudoku checker** (`oskit.sudoku`): reads an N×N puzzle (N a perfect
  square). It reports whether the puzzle is complete, meaning it has no zeros.
  For a complete puzzle it also reports whether every row, column and box
  holds each number from 1 to N exactly once.
- **Contiguous memory allocation** (`oskit.memory`): an 80-unit memory pool
  with first-fit, best-fit and worst-fit placement, release and compaction,
  driven from a command shell.
- **CPU scheduling** (`oskit.tasks`, `oskit.schedulers`,
  `oskit.scheduler_cli`): FCFS, SJF, priority, round-robin and priority
  round-robin schedulers. Each reports its dispatches, the CPU utilization
  and a table of turnaround, waiting and response times.
- **Block file system** (`oskit.errors`, `oskit.bio`, `oskit.bfs`,
  `oskit.fs`, `oskit.debug`, `oskit.selftest`): a tiny Unix-like file system
  kept in one disk image of 100 blocks of 512 bytes. It has a super block, an
  inode table, a directory, a free list and an open file table.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Commands

### Sudoku checker

```
oskit-sudoku puzzle.txt
```

The puzzle file starts with the size N. The N×N values follow, separated by
whitespace, with 0 for an empty cell. The command prints
`Complete puzzle? true|false`. For a complete puzzle it also prints
`Valid puzzle? true|false`. It then prints the puzzle itself. If the file
cannot be read or the puzzle has an unusable shape, it prints the error and
exits with status 1.

### Memory allocator shell

```
oskit-memory
```

Commands are read from standard input at the `command>` prompt. Letters are
not case sensitive, except in the file name given to `R`.

| Command                     | Meaning                                                        |
|-----------------------------|----------------------------------------------------------------|
| `A <name> <size> <F\|B\|W>` | allocate `size` units to `name` with first, best or worst fit  |
| `F <name>`                  | free every block owned by `name`                               |
| `S`                         | show the pool, one character per unit, `.` for free units      |
| `C`                         | compact all blocks towards address 0                           |
| `R <file>`                  | run the commands in a file, stopping at an `E` line            |
| `E`                         | exit                                                           |

A request larger than the biggest free block prints `Not enough memory`. An
unknown placement letter prints `Unknown algorithm`. Any other command prints
`Invalid command`.

### CPU schedulers

```
oskit-schedule {fcfs,sjf,priority,rr,priority_rr} tasks.txt
```

The task file holds one task per line in the form `name, priority, burst`.
Blank lines are skipped. For example:

```
T1, 4, 20
T2, 2, 25
T3, 3, 25
```

All tasks arrive at time zero, and ties are broken by task name:

- FCFS runs the tasks in name order.
- SJF runs the shortest burst first.
- Priority runs the highest priority first.
- Round-robin gives each task up to 10 units per turn.
- Priority round-robin takes the priority levels from highest to lowest.
  Tasks that share a level take round-robin turns. A task alone at its level
  runs its whole burst at once.

### File system self-check

```
oskit-bfs-selftest [DISK] [--format]
```

`DISK` defaults to `BFSDISK` in the current directory. With `--format` the
command first formats the disk and writes a 50-block file named `P5`. Every
byte of block *b* holds the value *b*. Without `--format` the disk must
already exist and hold `P5`.

The command then runs six tests of reads, writes and seeks: small, spanning
and extending. It prints `GOOD` or `BAD` for each check and exits with
status 1 if any check fails.

## Library use

- `oskit.sudoku`: `parse_puzzle`, `read_puzzle`, `check_puzzle` (returns a
  `CheckResult` with `complete` and `valid`), `is_complete`, `rows_valid`,
  `columns_valid`, `subgrid_valid` and `format_puzzle`. Errors are raised as
  `PuzzleError`.
- `oskit.memory`:
  - `MemoryPool` with `request`, `release`, `compact`, `show`, `holes`,
    `max_hole` and `allocations`.
  - `Algorithm` names the placement strategies.
  - Failed requests raise `AllocationError`.
  - `Shell` runs text commands against a pool.
- `oskit.tasks`: `Task`, `format_run`, `cpu_utilization`,
  `format_utilization` and `format_table`.
- `oskit.schedulers`: `fcfs`, `sjf`, `priority`, `round_robin` and
  `priority_round_robin`.
  - Each returns a `ScheduleResult`, which holds its `Dispatch` records, the
    finished tasks and the utilization.
  - `format_result` renders the printed report.
- `oskit.scheduler_cli.parse_tasks` parses task lines.
- `oskit.fs`: `FileSystem` with `format`, `mount`, `create`, `open`, `close`,
  `read`, `write`, `seek` (with `Whence`), `tell` and `size`.
- `oskit.bfs`: `Bfs` handles inodes, the directory, the free list and the
  open file table.
- `oskit.bio`: `BlockDevice` reads and writes whole blocks.
- Failures are raised as `oskit.errors.BfsError`, which carries an
  `ErrorCode`.
- `oskit.debug`: `dump_block`, `dump_dir`, `dump_inodes` and `dump_super`
  return text dumps of a disk image.

## Limits

The file system is deliberately small:

- It has a single flat directory of 8 names, each at most 15 bytes.
- Files cannot be deleted or renamed.
- A read may not ask for more bytes than the file holds.
- There is no command for creating or browsing files. Use `FileSystem` from
  Python, or the self-check command.

The memory pool exists only for the life of a shell session.