from packstore.adapters.local_fs import LocalFileSystem


def test_delete_is_idempotent(tmp_path):
    fs = LocalFileSystem()
    folder = tmp_path / "pkg"
    (folder / "nested").mkdir(parents=True)
    (folder / "nested" / "file.txt").write_text("x", encoding="utf-8")

    fs.delete(folder)
    fs.delete(folder)
    fs.delete(tmp_path / "never-existed.txt")

    assert not folder.exists()


def test_copy_tree_merges_and_overwrites(tmp_path):
    fs = LocalFileSystem()
    source = tmp_path / "src"
    dest = tmp_path / "dst"
    (source / "sub").mkdir(parents=True)
    (source / "sub" / "b.txt").write_text("new", encoding="utf-8")
    (dest / "sub").mkdir(parents=True)
    (dest / "sub" / "b.txt").write_text("old", encoding="utf-8")
    (dest / "keep.txt").write_text("keep", encoding="utf-8")

    fs.copy_tree(source, dest)

    assert (dest / "sub" / "b.txt").read_text(encoding="utf-8") == "new"
    assert (dest / "keep.txt").read_text(encoding="utf-8") == "keep"


def test_copy_tree_copies_single_file(tmp_path):
    fs = LocalFileSystem()
    source = tmp_path / "a.txt"
    source.write_text("a", encoding="utf-8")

    fs.copy_tree(source, tmp_path / "out" / "deep" / "a.txt")

    assert (tmp_path / "out" / "deep" / "a.txt").read_text(encoding="utf-8") == "a"


def test_list_directory_is_sorted(tmp_path):
    for name in ("b", "a", "c"):
        (tmp_path / name).mkdir()
    assert LocalFileSystem().list_directory(tmp_path) == ["a", "b", "c"]


def test_rename_and_find_file(tmp_path):
    fs = LocalFileSystem()
    (tmp_path / "root" / "x" / "y").mkdir(parents=True)
    (tmp_path / "root" / "x" / "y" / "main.jsbundle").write_text("js", encoding="utf-8")

    renamed = fs.rename(tmp_path / "root", "renamed")

    assert renamed == tmp_path / "renamed"
    assert fs.find_file(renamed, "main.jsbundle") == renamed / "x" / "y" / "main.jsbundle"
    assert fs.find_file(renamed, "missing.js") is None
