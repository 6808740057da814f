import os

import pytest

from alloy.loaderutil import (
    FuncDecl,
    LoaderInfo,
    discover_loaders,
    file_path_to_function_name,
    file_path_to_route,
    is_any_type,
    is_error_type,
    is_gin_context_type,
    is_valid_api_handler_signature,
    is_valid_loader_signature,
    parse_go_functions,
)

GO_SOURCE = '''package pages

import "github.com/gin-gonic/gin"

// func Commented(c *gin.Context) (any, error)
var handler = func(c *gin.Context) {}

type LoaderFunc func(c *gin.Context) (any, error)

const banner = "func Fake(c *gin.Context) {"

func helper() string { return `}` }

func (s *Server) Method(c *gin.Context) (any, error) {
\treturn nil, nil
}

func Generic[T any](c *gin.Context) (any, error) { return nil, nil }

func LoadIndex(c *gin.Context) (any, error) {
\tif true {
\t\treturn map[string]any{"x": struct{}{}}, nil
\t}
\treturn nil, nil
}

func Hello(c *gin.Context) {
}

func Pair(a, b *gin.Context) error { return nil }
'''


@pytest.fixture
def decls():
    return {decl.name: decl for decl in parse_go_functions(GO_SOURCE)}


def test_parses_only_declarations(decls):
    names = [decl.name for decl in parse_go_functions(GO_SOURCE)]
    assert names == ["helper", "Method", "Generic", "LoadIndex", "Hello", "Pair"]


def test_loader_signature(decls):
    assert is_valid_loader_signature(decls["LoadIndex"]) is True
    assert is_valid_api_handler_signature(decls["LoadIndex"]) is False


def test_api_handler_signature(decls):
    assert decls["Hello"].results is None
    assert is_valid_api_handler_signature(decls["Hello"]) is True
    assert is_valid_loader_signature(decls["Hello"]) is False


def test_method_keeps_receiver(decls):
    method = decls["Method"]
    assert method.receiver == FuncDecl.Field(("s",), "*Server")
    assert is_valid_loader_signature(method) is True


def test_grouped_parameters(decls):
    pair = decls["Pair"]
    assert pair.params == (FuncDecl.Field(("a", "b"), "*gin.Context"),)
    assert pair.results == (FuncDecl.Field((), "error"),)
    assert is_valid_loader_signature(pair) is False


def test_exported_flag(decls):
    assert decls["LoadIndex"].is_exported is True
    assert decls["helper"].is_exported is False


def test_signature_on_constructed_decl():
    field = FuncDecl.Field
    decl = FuncDecl("Load", (field((), "*gin.Context"),), (field((), "any"), field((), "error")))
    assert is_valid_loader_signature(decl) is True
    no_results = FuncDecl("Load", (field((), "*gin.Context"),), ())
    assert is_valid_loader_signature(no_results) is False
    assert is_valid_api_handler_signature(no_results) is True


def test_type_predicates():
    assert is_gin_context_type("*gin.Context") is True
    assert is_gin_context_type("gin.Context") is False
    assert is_gin_context_type("*http.Context") is False
    assert is_any_type("any") is True
    assert is_any_type("interface{}") is False
    assert is_error_type("error") is True
    assert is_error_type("*error") is False


@pytest.mark.parametrize(
    "source",
    [
        "func F() {}",
        "package p\nfunc F( {",
        'package p\nconst s = "open\n',
        "package p\n/* never closed",
        "package p\nfunc (a, b T) M() {}",
    ],
)
def test_syntax_errors_raise(source):
    with pytest.raises(ValueError):
        parse_go_functions(source)


@pytest.fixture
def pages(tmp_path):
    root = tmp_path / "pages"
    (root / "api").mkdir(parents=True)
    (root / "blog").mkdir()
    (root / "index.tsx").write_text("export default 1")
    (root / "index.go").write_text(
        "package pages\nfunc LoadIndex(c *gin.Context) (any, error) { return nil, nil }\n"
    )
    (root / "index_test.go").write_text(
        "package pages\nfunc LoadTest(c *gin.Context) (any, error) { return nil, nil }\n"
    )
    (root / "about.go").write_text(
        "package pages\nfunc LoadAbout(c *gin.Context) (any, error) { return nil, nil }\n"
    )
    (root / "broken.tsx").write_text("export default 2")
    (root / "broken.go").write_text("package pages\nfunc LoadBroken(c *gin.Context) (any, error {\n")
    (root / "blog" / "[slug].tsx").write_text("export default 3")
    (root / "blog" / "[slug].go").write_text(
        "package pages\nfunc helper() {}\n"
        "func LoadPost(c *gin.Context) (any, error) { return nil, nil }\n"
    )
    (root / "api" / "hello.go").write_text(
        "package api\nfunc Hello(c *gin.Context) {\n}\n"
    )
    return root


def test_discover_loaders(pages):
    assert discover_loaders(str(pages)) == [
        LoaderInfo("/api/hello", "Hello", os.path.join("api", "hello.go"), True),
        LoaderInfo("/blog/:slug", "LoadPost", os.path.join("blog", "[slug].go"), False),
        LoaderInfo("/", "LoadIndex", "index.go", False),
    ]


def test_discover_loaders_requires_dir():
    with pytest.raises(ValueError):
        discover_loaders("")


def test_discover_loaders_missing_dir(tmp_path):
    with pytest.raises(FileNotFoundError):
        discover_loaders(str(tmp_path / "absent"))


ROOT = os.path.join(os.sep, "srv", "pages")


def test_route_page_index():
    assert file_path_to_route(os.path.join(ROOT, "index.go"), ROOT, False) == "/"


def test_route_page_about():
    assert file_path_to_route(os.path.join(ROOT, "about.go"), ROOT, False) == "/about"


def test_route_api():
    path = os.path.join(ROOT, "api", "hello.go")
    assert file_path_to_route(path, ROOT, True) == "/api/hello"


def test_route_api_param():
    path = os.path.join(ROOT, "api", "users", "[id].go")
    assert file_path_to_route(path, ROOT, True) == "/api/users/:id"


def test_api_index_is_not_root():
    route = file_path_to_route(os.path.join(ROOT, "api", "index.go"), ROOT, True)
    assert route.startswith("/api/")
    assert route != "/"


def test_function_name_for_index():
    assert file_path_to_function_name("index.go") == "LoadIndex"
    assert file_path_to_function_name("index.tsx") == "LoadIndex"


def test_function_name_with_directory():
    assert file_path_to_function_name("blog/post_list.go") == "LoadBlogPostList"


def test_function_name_param_directory():
    assert file_path_to_function_name("[id]/show.go") == "LoadIdShow"


def test_function_name_dot_prefix_matches_plain():
    assert file_path_to_function_name("./about.go") == file_path_to_function_name("about.go")