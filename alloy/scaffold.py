"""Creating a new project skeleton."""

from __future__ import annotations

import json
import sys
from pathlib import Path

from .generate import FRAMEWORK_MODULE, GIN_MODULE, generate_loader_registry
from .loaderutil import LoaderInfo

_PROJECT_MODULE = "my-app"
_GREETING = "Hello from Alloy! 🚀"


def _go_imports(*groups: tuple[str, ...]) -> str:
    blocks = ["\n".join(f'\t"{name}"' for name in group) for group in groups if group]
    return "import (\n" + "\n\n".join(blocks) + "\n)\n"


def _index_loader() -> str:
    return (
        "package pages\n\n"
        + _go_imports((GIN_MODULE,))
        + "\n// LoadIndex supplies the props for pages/index.tsx.\n"
        "func LoadIndex(c *gin.Context) (any, error) {\n"
        f'\treturn map[string]any{{"message": "{_GREETING}"}}, nil\n'
        "}\n"
    )


def _api_hello() -> str:
    return (
        "package api\n\n"
        + _go_imports((GIN_MODULE,))
        + "\n// Hello answers /api/hello, greeting the ?name= query value.\n"
        "func Hello(c *gin.Context) {\n"
        '\tgreeting := "Hello, " + c.DefaultQuery("name", "World") + "!"\n'
        '\tc.JSON(200, gin.H{"message": greeting, "status": "ok"})\n'
        "}\n"
    )


def _main_go() -> str:
    return (
        "package main\n\n"
        + _go_imports(("embed", "log"), (FRAMEWORK_MODULE, f"{_PROJECT_MODULE}/pages"))
        + "\n//go:embed .alloy\nvar EmbedFS embed.FS\n\n"
        "func main() {\n"
        "\tengine := alloy.New(alloy.Options{\n"
        "\t\tEmbedFS:  &EmbedFS,\n"
        '\t\tTitle:    "My Alloy App",\n'
        "\t\tLoaders:  pages.LoaderRegistry,\n"
        "\t\tHandlers: pages.HandlerRegistry,\n"
        "\t})\n"
        "\tif err := engine.Start(); err != nil {\n"
        "\t\tlog.Fatal(err)\n"
        "\t}\n"
        "}\n"
    )


def _generate_go() -> str:
    return f"package pages\n\n//go:generate go run {FRAMEWORK_MODULE}/cmd/alloy-gen-loaders .\n"


def _loaders_generated() -> str:
    loaders = [
        LoaderInfo("/", "LoadIndex", "index.go", False),
        LoaderInfo("/api/hello", "Hello", "api/hello.go", True),
    ]
    return generate_loader_registry("pages", f"{_PROJECT_MODULE}/pages/api", loaders)


def _go_mod() -> str:
    return "\n".join(
        [
            f"module {_PROJECT_MODULE}",
            "",
            "go 1.23",
            "",
            f"require {FRAMEWORK_MODULE} v0.1.0",
            "",
            "// To work against a local checkout, uncomment and adjust:",
            f"// replace {FRAMEWORK_MODULE} => ../alloy",
            "",
        ]
    )


_INDEX_PAGE = """import "../styles.css";

type Props = { message: string };

const action = "inline-block rounded-lg px-6 py-3 text-white transition";

export default function Home({ message }: Props) {
  return (
    <main className="flex min-h-screen flex-col items-center justify-center bg-gradient-to-b from-white to-gray-50">
      <h1 className="mb-4 text-5xl font-bold text-gray-900">Welcome to Alloy</h1>
      <p className="mb-8 text-xl text-gray-600">{message}</p>
      <div className="space-x-4">
        <a href="/api/hello" className={action + " bg-gray-900 hover:bg-gray-800"}>
          Try the API
        </a>
        <button
          type="button"
          onClick={() => alert("Interactive! 🎉")}
          className={action + " bg-blue-600 hover:bg-blue-700"}
        >
          Click Me
        </button>
      </div>
    </main>
  );
}
"""

_PACKAGE = {
    "name": "my-alloy-app",
    "version": "0.1.0",
    "dependencies": {"react": "^19", "react-dom": "^19"},
    "devDependencies": {"@types/react": "^19", "@types/react-dom": "^19"},
}

_TSCONFIG = {
    "compilerOptions": {
        "target": "ESNext",
        "module": "ESNext",
        "moduleResolution": "Bundler",
        "allowImportingTsExtensions": True,
        "resolveJsonModule": True,
        "verbatimModuleSyntax": True,
        "isolatedModules": True,
        "noEmit": True,
        "forceConsistentCasingInFileNames": True,
        "esModuleInterop": True,
        "skipLibCheck": True,
        "allowJs": True,
        "jsx": "react-jsx",
        "jsxImportSource": "react",
        "strict": True,
        "baseUrl": ".",
        "paths": {"@/*": ["./*"]},
    },
    "exclude": ["dist"],
    "include": ["./**/*"],
}

_IGNORED = (
    ".alloy/",
    ".alloy-cache/",
    "dist/",
    "tmp/",
    "node_modules/",
    "*.ssr.js",
    "*.o",
    "*.exe",
    ".DS_Store",
    "go.sum",
)

_FAVICON_PATH = (
    "M26 31h4v4h-4zM6 31h4v4H6zm24-21h-2V8h-2V6h-3V2h-2v4h-6V2h-2v4h-3v2H8v2H6v7H2v2h4v7h4v5h5"
    "v-5h6v5h5v-5h4v-7h4v-2h-4v-7zM16 21h-4v-8h4v8zm4 0v-8h4v8h-4zM34 6h2v11h-2zM0 6h2v11H0z"
)


def _favicon() -> str:
    return (
        '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 36 36">'
        f'<path fill="#553986" d="{_FAVICON_PATH}"/></svg>'
    )


def _json(data: dict) -> str:
    return json.dumps(data, indent=2) + "\n"


def _skeleton() -> dict[str, str]:
    return {
        ".alloy/keep": "",
        ".alloy/favicon.svg": _favicon(),
        "main.go": _main_go(),
        "pages/generate.go": _generate_go(),
        "pages/index.tsx": _INDEX_PAGE,
        "pages/index.go": _index_loader(),
        "pages/loaders_generated.go": _loaders_generated(),
        "pages/api/hello.go": _api_hello(),
        "styles.css": '@import "tailwindcss";\n',
        "go.mod": _go_mod(),
        "tsconfig.json": _json(_TSCONFIG),
        "package.json": _json(_PACKAGE),
        ".gitignore": "\n".join(_IGNORED) + "\n",
    }


_DIRECTORIES = ("pages", "pages/api", ".alloy")

_RULE = "━" * 51


def _print_next_steps(name: str) -> None:
    steps = (
        (f"cd {name}", ""),
        ("alloy install", "Install dependencies"),
        ("alloy dev", "Start development"),
        ("alloy build", "Build for production"),
        ("./dist/app", "Run production binary"),
    )
    print()
    print(_RULE)
    print(f"✓ Project '{name}' created successfully!")
    print(_RULE)
    print()
    print("🚀 Next steps:\n")
    for command, note in steps:
        print(f"  {command:<17} # {note}" if note else f"  {command}")
    print()
    print("Open your browser at http://localhost:8080\n")
    print("Happy coding! 🎉")
    print(_RULE)


def create_project(name: str) -> Path:
    """Create a new project directory named ``name`` and return its path.

    Raises OSError (FileExistsError if the directory already exists).
    """
    project = Path(name)
    project.mkdir()

    print("📁 Creating project structure...")
    for directory in _DIRECTORIES:
        (project / directory).mkdir(parents=True, exist_ok=True)

    print("📝 Creating files...")
    for relative, content in _skeleton().items():
        (project / relative).write_text(content, encoding="utf-8")

    _print_next_steps(name)
    return project


def new_cmd(args=None) -> None:
    """Run ``new <project-name>``; exit with status 1 on failure."""
    args = list(sys.argv[1:] if args is None else args)
    if not args:
        print("❌ Usage: alloy new <project-name>", file=sys.stderr)
        raise SystemExit(1)
    try:
        create_project(args[0])
    except OSError as exc:
        print(f"❌ Failed to create project: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc