# fuelindex

A command-line orchestrator for Fuel indexers. It scaffolds new indexer
projects, builds them with `cargo`, deploys them to an indexer service,
reports the service's status, removes deployed indexers and starts native
indexers.

## Installation

From a checkout of this package:

```
pip install .
pip install ".[test]"   # with the test dependencies (pytest, responses)
```

The package needs Python 3.11 or later, plus `requests` and `pyyaml`.

Several commands call external programs, which must be on your `PATH`:

- `build`, `deploy` and `run-native` run `cargo` (with the
  `wasm32-unknown-unknown` target for WASM indexers); WASM builds also run
  `wasm-snip`.
- `auth` runs `forc-wallet sign` to sign the service's nonce.
- `check` uses `which` to look for the tools an indexer workflow needs.
- `kill` uses `lsof` and `kill`.

## Usage

Everything runs through the `forc-index` command:

```
forc-index new my-indexer              # scaffold a new WASM indexer project
forc-index new my-indexer --native     # scaffold a native indexer instead
forc-index check                       # list which indexer tools are installed
forc-index build --path my-indexer     # build the indexer
forc-index deploy --path my-indexer    # build and deploy to the indexer service
forc-index status                      # show service health and registered indexers
forc-index remove --path my-indexer    # stop and remove a deployed indexer
forc-index auth --account 0            # get an authentication token
forc-index kill --port 29987           # terminate the process listening on a port
forc-index kill --port 29987 -9        # kill it with SIGKILL instead
forc-index run-native --path my-indexer -- --run-migrations
```

Notes on the commands:

- `new` writes `Cargo.toml`, an indexer manifest (`<name>.manifest.yaml`),
  a GraphQL schema under `schema/`, and the entry point `src/lib.rs`
  (WASM, together with `.cargo/config`) or `src/main.rs` (`--native`).
  Dashes in the project name become underscores; the name must be a valid
  crate name. Without `--namespace` the namespace is the login user name.
  `--absolute-paths` writes absolute schema and manifest paths.
- `build` builds in release mode unless `--debug` is given. A WASM build
  then runs `wasm-snip` on the artifact and records its path under
  `module` in the indexer manifest.
- `deploy` builds first unless `--skip-build` is given, then uploads the
  manifest, schema and module. With both `--replace-indexer` and
  `--remove-data` it removes the existing indexer and its data first.
- `run-native` builds first unless `--skip-build` is given, then starts
  the native binary (or the one given with `--bin`) with `--manifest`
  and any arguments after `--`.

The indexer service URL defaults to `http://127.0.0.1:29987`; pass `--url`
to point at another one. `deploy`, `remove` and `status` take `--auth` with
the value of the `Authorization` header, for example
`--auth "Bearer token"`.

## Library use

The pieces behind the commands can also be used from Python:

- `fuelindex.defaults` – the project templates (`default_indexer_cargo_toml`,
  `default_indexer_manifest`, `default_indexer_schema`, …) and constants.
- `fuelindex.manifest.Manifest` – read (`Manifest.from_file`), update
  (`set_module`) and write (`write`) indexer manifests;
  `ExecutionSource` tells WASM from native modules.
- `fuelindex.new.create_indexer` – scaffold a project; returns its name.
- `fuelindex.status.format_indexers` and `format_uptime` – render the
  status tree and uptimes.
- `fuelindex.build.cargo_build_command` – the `cargo build` command line
  for a set of options.
- `fuelindex.pg.PgEmbedConfig` – embedded PostgreSQL settings, saved to and
  loaded from `<name>-db.json` (by default under `~/.fuel/indexer/<name>`),
  with `PostgresVersion` and `AuthMethod`.

## What it does not do

- There is no `start` command: the package does not launch a local indexer
  service. Run the service yourself and point `--url` at it.
- There are no commands to create, start, stop or drop an embedded
  PostgreSQL database. `fuelindex.pg` only models and stores the database
  settings; it does not download or run PostgreSQL.