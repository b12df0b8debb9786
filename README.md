# kool

A library of building blocks for a Docker-based development workflow and for
deploying projects to the Kool cloud: wrapping `docker-compose`, checking that
Docker is available, editing compose files, packing tarballs and talking to
the deploy API.

## Installation

```
pip install .
```

For running the test suite:

```
pip install ".[test]"
pytest
```

## Modules

### `kool.compose`

- `Command(cmd, *args)` — an executable with its arguments: `cmd()`,
  `args()` (a copy), `append_args(*args)`, `copy()`; `str()` gives the whole
  command line.
- `DockerCompose(cmd, *args, env=None, look_path=None, local_docker_compose=None, is_tty=False)`
  — a `docker-compose` command. When `docker-compose` is found on the `PATH`
  (or by the `look_path` callable you pass), `cmd()` is `docker-compose` and
  `args()` is the subcommand with its arguments. Otherwise `cmd()` is
  `docker` and `args()` runs the `docker/compose:1.28.0` image with
  `run --rm -i` (plus `-t` when `is_tty`), the Docker socket or
  `DOCKER_HOST`/TLS variables, the current directory and `HOME` mounted, every
  environment variable except `PATH` passed down, and `-p $KOOL_NAME`.
  If `DOCKER_HOST` is unset it is set to `unix:///var/run/docker.sock` in
  `env` (by default `os.environ`).

### `kool.compose_parser`

- `ComposeParser` — a docker-compose document (`version`, `services`,
  `volumes`, `networks`). A new parser starts at version `3.7` with the
  `kool_local` and external `kool_global` networks. `parse(content)` replaces
  the document with YAML text, `set_service(name, content)` adds or replaces a
  service keeping its position, `set_volume(volume)` adds a named volume once,
  and `dump()` returns YAML with keys in their original order; empty
  `volumes` and `networks` are left out.
- `FakeParser` — records calls (`called_parse`, `called_set_service`,
  `called_set_volume`, `called_dump`) and raises `mock_parse_error` or
  `mock_dump_error` when set.

### `kool.checker`

- `new_checker(shell)` returns a `DefaultChecker` for `docker info` and
  `docker-compose ps`. `check()` raises `DockerNotFoundError`,
  `DockerComposeNotFoundError` or `DockerNotRunningError` (all
  `CheckerError`). The `shell` object is yours to supply: it needs
  `look_path(command)` returning whether the executable is available and
  `exec(command)` raising when the command fails.
- `FakeChecker` records `called_check` and raises `mock_error` when set.

### `kool.elevated`

- `current_user_is_elevated()` — `True` when running as root, or on Windows
  when the physical drive can be opened (Administrator).

### `kool.tgz`

- `new_temp()` returns a `TarGz` writing to a new temporary `.tgz` file.
  `compress_folder(directory)` archives everything below the directory with
  paths relative to it; `compress_files(files)` archives the listed files,
  logging a warning for missing ones. Both return the tarball's path.
  Symbolic links are skipped. `set_ignore_list(paths)` leaves the given
  relative paths out.

### `kool.endpoint`, `kool.calls`, `kool.api_errors`

- `Endpoint(method, env=None, session=None)` — set `path`, `query`, `body`
  (form fields sent with a POST), `raw_body` and `content_type`, then
  `do_call()` returns the decoded JSON response and records `status_code`.
  Requests need `KOOL_API_TOKEN` in `env` (by default `os.environ`);
  `KOOL_VERBOSE=1` prints the URL and response to standard error.
  `set_base_url(url)` changes the API address (default `https://kool.dev/api`).
- `StatusCall(deploy_id)`, `ExecCall()` and `DestroyCall()` call
  `deploy/<id>/status`, `deploy/exec` and `deploy`, returning a
  `StatusResponse`, `ExecResponse` or `DestroyResponse`.
- Errors derive from `ApiError`: `MissingTokenError`, `ApiResponseError`
  (with `status`, `api_message`, `errors`), `UnexpectedResponseError`,
  `UnauthorizedError`, `PayloadValidationError`, `BadResponseStatusError`,
  `DeployFailedError` and `BadApiServerError`.

### `kool.deploy`

- `Deploy(tarball_path)` — `send_file()` uploads the tarball to
  `deploy/create` (with `KOOL_DEPLOY_DOMAIN`, `KOOL_DEPLOY_DOMAIN_EXTRAS` and
  `KOOL_DEPLOY_WWW_REDIRECT` when set) and stores `deploy_id`;
  `fetch_latest_status()` refreshes `status` and raises `DeployFailedError`
  on failure; `is_successful()` and `url()` report the outcome.

### `kool.kubectl`

- `K8S(api_exec=None, auth_temp_path=None)` — `authenticate(domain, service)`
  fetches cluster credentials, writes the CA certificate to `ca_path` and
  returns the service path; `kubectl(look_path)` returns a `Command` for
  `kubectl`, or for `kool docker` with the `kooldev/toolkit:full` image when
  `look_path` reports kubectl missing; `cleanup(out)` removes the CA file and
  calls `out.warning(...)` if that fails.

## Example

```python
from kool.tgz import new_temp
from kool.deploy import Deploy

tarball = new_temp().compress_folder(".")
deploy = Deploy(tarball)
deploy.send_file()
deploy.fetch_latest_status()
if deploy.is_successful():
    print(deploy.url())
```

## What this package does not do

It is a library only: there is no `kool` command-line program, and no shell
implementation for running commands. `DockerCompose` and `K8S.kubectl()`
build command lines but do not run them, and `DefaultChecker` relies on the
shell object you pass in. There is no self-update support and no project
presets or templates.