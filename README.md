# alloy

Tools for projects made of server-rendered React pages with file-based
routing. Pages are `.tsx` files under a pages directory; each file becomes a
route, and an optional Go loader next to it supplies the props the page is
rendered with. The package discovers pages and loaders, generates the loader
registry, renders the HTML document around a rendered page, validates pages
before a build, fetches the Tailwind CLI, and ships a command line that
scaffolds, installs, runs and builds projects.

## Installation

```
pip install alloy
```

## Command line

```
alloy new my-app              # create a project skeleton in ./my-app
alloy install --dir my-app    # go mod tidy, npm install, prepare .alloy/, fetch Tailwind if used
alloy dev --dir my-app        # run the project's development program
alloy build --dir my-app      # production build, binary at dist/app by default
alloy build --output out/app  # choose where the binary goes (relative to the project)
alloy version                 # print the version
alloy help                    # show usage
```

`install`, `dev` and `build` expect a project directory holding `main.go`;
`dev` and `build` also read the module name from its `go.mod`. They drive
the `go` and `npm` tools found on your `PATH`. `alloy dev` accepts
`--port`, but only prints it; the development program chooses the port it
listens on.

The same commands are available as functions: `alloy.scaffold.create_project`,
`alloy.install.run_install`, `alloy.godev.run_dev` and
`alloy.gobuild.run_build`. `alloy.flags.parse_flags` parses the shared
`-port`, `-dir` and `-output` flags.

## What this package does not do

It contains no HTTP server, no JavaScript bundler, no script engine for
server-side rendering and no file watchers or hot-reload socket. `alloy dev`
and `alloy build` write a small Go program into a temporary directory and run
it with `go run` (and, for `build`, `go build`); that program imports the
`alloy` Go module and its `cli` package, which must be available to the
project. Serving pages, bundling and watching happen there, not in Python.

## Routing

Files under the pages directory map to routes:

| File                      | Route          |
|---------------------------|----------------|
| `pages/index.tsx`         | `/`            |
| `pages/about.tsx`         | `/about`       |
| `pages/blog/[slug].tsx`   | `/blog/:slug`  |
| `pages/api/hello.go`      | `/api/hello`   |

```python
from alloy.page import Options, discover_pages

pages = discover_pages("pages", loaders={})
for page in pages:
    page.assign_options(Options(title="My App"))
    print(page.route, page.file, page.lang)
```

`assign_options` copies the shared title (when the page has none), meta
tags, links, language (default `en`), CSS class and error handler onto a
page. `Page.asset_url`, `Page.server_bundle` and `Page.client_bundles` locate
a page's bundles under `.alloy/`, reading from disk in development and from
`Options.embed_root` otherwise. `alloy.discovery.file_path_to_route` and
`alloy.loaderutil.file_path_to_route` expose the route mapping directly.

## Loaders and API handlers

`alloy.loaderutil.discover_loaders` scans a pages directory's `.go` files
for the first exported function with a loader signature
(`func(c *gin.Context) (any, error)`, next to a matching `.tsx` page) or an
API handler signature (`func(c *gin.Context)`, under `api/`).
`parse_go_functions` reads the top-level function declarations it checks.

`alloy.generate.generate_loaders` writes `loaders_generated.go` from what it
finds, importing the `api` package by the path worked out from the nearest
`go.mod`; `ensure_generated_loaders` does so only when the file is missing,
and `generate_loader_registry` returns the source without writing it.

## Rendering the document

`alloy.document.render_document` produces the full HTML document for a
`DocumentData`: title, meta tags, links, stylesheet, the server-rendered
markup, the hydration script with the page props, and, in development, the
reload client script. `document_for_page` builds it straight from a `Page`
and its rendered markup and bundle paths; `error_payload` gives the JSON body
for a failed step.

Failures are described by `alloy.errors.RenderError`;
`alloy.errors.extract_js_error_context` turns a raw script error into a short
hint.

## Environment and cache

`alloy.env.is_prod()` and `alloy.env.is_dev()` read the `Alloy_ENV`
variable (`production` selects production mode); `set_production(True)`
forces production mode. `page_cache_key` gives a bundle's path under
`.alloy/`, and `clean_cache()` empties that directory except for
`favicon.svg` and `keep` (creating it with `keep` if missing).
`alloy.cache` keeps server bundles in memory; `clear_bundle_cache()` drops
them.

## Build checks

`alloy.buildutils.validate_pages` checks that every page file exists, has a
`.tsx`, `.jsx`, `.ts` or `.js` extension and is not a directory, and warns
about empty pages and pages that appear not to export a component.
`print_validation_results` reports the outcome and raises `ValidationFailed`
when there are errors; `extract_build_error_context` shortens bundler errors.

## Tailwind CSS

A stylesheet containing `@import "tailwindcss"` (the root `styles.css` or a
CSS file beside a page) turns on Tailwind. `alloy.tailwind.ensure_tailwind`
downloads the standalone Tailwind CLI into `.alloy-cache/` the first time it
is needed, for Windows x64, Linux x64/arm64 or macOS x64/arm64, and
`run_tailwind` runs it. Failures raise `TailwindError`.

## Development

```
pip install -e ".[test]"
pytest
```