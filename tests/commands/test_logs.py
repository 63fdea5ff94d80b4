from platsync.commands.logs import log_info, show_logs


def test_show_logs_no_log_file(mocker):
    mocker.patch("platsync.commands.logs.setup_logging")
    mocker.patch("platsync.commands.logs.get_logger")

    log_path = mocker.Mock()
    log_path.exists.return_value = False

    mocker.patch("platsync.commands.logs.get_log_file_path", return_value=log_path)
    warning = mocker.patch("platsync.commands.logs.warning")

    show_logs(lines=10, level=None)

    warning.assert_called_once()


def test_show_logs_with_lines(mocker, tmp_path):
    mocker.patch("platsync.commands.logs.setup_logging")
    mocker.patch("platsync.commands.logs.get_logger")

    log_file = tmp_path / "platsync.log"
    log_file.write_text("INFO one\nERROR two\nDEBUG three\n", encoding="utf-8")

    mocker.patch("platsync.commands.logs.get_log_file_path", return_value=log_file)
    console = mocker.patch("platsync.commands.logs.console")

    show_logs(lines=2, level=None)

    console.print.assert_called_once()
    assert console.print.call_args[0][0].code == "ERROR two\nDEBUG three\n"


def test_show_logs_with_level_filter(mocker, tmp_path):
    mocker.patch("platsync.commands.logs.setup_logging")
    mocker.patch("platsync.commands.logs.get_logger")

    log_file = tmp_path / "platsync.log"
    log_file.write_text("INFO one\nERROR two\nERROR three\n", encoding="utf-8")

    mocker.patch("platsync.commands.logs.get_log_file_path", return_value=log_file)
    console = mocker.patch("platsync.commands.logs.console")

    show_logs(lines=10, level="error")

    assert console.print.call_args[0][0].code == "ERROR two\nERROR three\n"


def test_show_logs_no_matching_lines(mocker, tmp_path):
    mocker.patch("platsync.commands.logs.setup_logging")
    mocker.patch("platsync.commands.logs.get_logger")

    log_file = tmp_path / "platsync.log"
    log_file.write_text("INFO one\nDEBUG two\n", encoding="utf-8")

    mocker.patch("platsync.commands.logs.get_log_file_path", return_value=log_file)
    info = mocker.patch("platsync.commands.logs.info")

    show_logs(lines=10, level="ERROR")

    info.assert_called_once()


def test_log_info_with_log_file(mocker, tmp_path):
    config = mocker.Mock()
    config.log_retention_days = 7

    log_file = tmp_path / "platsync.log"
    log_file.write_text("hello", encoding="utf-8")
    (tmp_path / "platsync.log.2026-10-18").write_text("old", encoding="utf-8")

    mocker.patch("platsync.commands.logs.LogConfig", return_value=config)
    mocker.patch("platsync.commands.logs.get_log_directory", return_value=tmp_path)
    mocker.patch("platsync.commands.logs.get_log_file_path", return_value=log_file)
    console = mocker.patch("platsync.commands.logs.console")

    log_info()

    console.print.assert_called_once()
    table = console.print.call_args[0][0]
    assert "1" in list(table.columns[1].cells)


def test_log_info_no_log_file(mocker, tmp_path):
    config = mocker.Mock()
    config.log_retention_days = 7

    mocker.patch("platsync.commands.logs.LogConfig", return_value=config)
    mocker.patch("platsync.commands.logs.get_log_directory", return_value=tmp_path)
    mocker.patch("platsync.commands.logs.get_log_file_path", return_value=tmp_path / "platsync.log")
    console = mocker.patch("platsync.commands.logs.console")

    log_info()

    table = console.print.call_args[0][0]
    assert "File not found" in list(table.columns[1].cells)
