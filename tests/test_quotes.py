from minish.quotes import (
    Command,
    count_pipes,
    count_quotes,
    count_redirs,
    first_quote,
    get_quote_type,
    has_quotes,
    quote_kind,
    remove_quotes,
    split_quoted_command,
)


def test_quote_kind():
    assert quote_kind("'") == 1
    assert quote_kind('"') == 2
    assert quote_kind("a") == 0


def test_first_quote_finds_matching_kind():
    text = "ab'c\"d"
    assert text[first_quote(text, 1)] == "'"
    assert text[first_quote(text, 2)] == '"'


def test_first_quote_invalid_kind_or_missing():
    assert first_quote("a'b", 0) == -1
    assert first_quote("abc", 1) == -1


def test_get_quote_type_single_pair():
    cmd = Command("'hello' world")
    end = get_quote_type(cmd)
    assert cmd.command[end - 1] == "'"
    assert cmd.has_quote is True
    assert cmd.quote_type == 0
    assert cmd.has_env is False


def test_get_quote_type_double_pair_allows_env():
    cmd = Command('"$HOME"')
    end = get_quote_type(cmd)
    assert end == len(cmd.command)
    assert cmd.has_env is True
    assert cmd.quote_type == 0


def test_get_quote_type_single_outside_double():
    cmd = Command("'a\"b\"'")
    get_quote_type(cmd)
    assert cmd.quote_type == 1
    assert cmd.has_quote is True


def test_get_quote_type_double_outside_single():
    cmd = Command("\"a'b'\"")
    get_quote_type(cmd)
    assert cmd.quote_type == 2
    assert cmd.has_env is True


def test_get_quote_type_no_quotes():
    cmd = Command("echo hi")
    assert get_quote_type(cmd) == 0
    assert cmd.has_quote is False


def test_has_quotes_matches_get_quote_type_end():
    cmd = Command("'hello' world")
    end = get_quote_type(cmd)
    assert has_quotes(cmd) == end


def test_has_quotes_none():
    assert has_quotes(Command("plain")) == 0


def test_count_quotes():
    assert count_quotes("a'b\"c'") == 3
    assert count_quotes("none") == 0


def test_remove_quotes_both_kinds():
    cmd = Command("\"x\" 'y' 'z'")
    removed = remove_quotes(cmd)
    assert removed == 2
    assert count_quotes(cmd.command) == 0


def test_remove_quotes_single_kind_only():
    cmd = Command("'a\"b\"'", quote_type=1)
    remove_quotes(cmd)
    assert cmd.command == 'a"b"'


def test_split_quoted_command_plain_pair():
    cmd = Command("'hello' world")
    get_quote_type(cmd)
    split_quoted_command(cmd)
    assert cmd.command == "hello"
    assert cmd.option == "world"


def test_split_quoted_command_keeps_all_options():
    cmd = Command('"echo" hi there')
    get_quote_type(cmd)
    split_quoted_command(cmd)
    assert cmd.command == "echo"
    assert cmd.option == "hi there"


def test_split_quoted_command_inner_quotes_kept():
    cmd = Command("'a\"b\"'")
    get_quote_type(cmd)
    split_quoted_command(cmd)
    assert cmd.command == 'a"b"'
    assert cmd.option == ""


def test_count_pipes():
    assert count_pipes(None) == 0
    assert count_pipes("ls") == 0
    assert count_pipes("a|b|c") == count_pipes("a|b") + 1


def test_count_redirs():
    assert count_redirs(None) == 0
    assert count_redirs("echo hi") == 0
    assert count_redirs("a > b < c") == count_redirs("a > b") + 1
    assert count_redirs("a >> b") == count_redirs("a > b > c")