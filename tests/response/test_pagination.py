from shopify_orm.response.pagination import PageInfo, PaginatedResult


def test_page_info_from_response():
    page_info = PageInfo.from_response(
        {
            "hasNextPage": True,
            "hasPreviousPage": False,
            "startCursor": "c1",
            "endCursor": "c2",
        },
    )

    assert page_info == PageInfo(
        has_next_page=True,
        has_previous_page=False,
        start_cursor="c1",
        end_cursor="c2",
    )
    assert not page_info.is_empty


def test_empty_page_info():
    page_info = PageInfo.from_response(None)

    assert page_info == PageInfo()
    assert page_info.is_empty
    assert not page_info.has_next_page


def test_paginated_result_sequence():
    result = PaginatedResult(["a", "b", "c"], PageInfo())

    assert len(result) == 3
    assert result[0] == "a"
    assert result[1:] == ["b", "c"]
    assert list(result) == ["a", "b", "c"]
    assert "b" in result
    assert result.to_list() == ["a", "b", "c"]


def test_paginated_result_navigation(mocker):
    next_page = PaginatedResult(["c"], PageInfo(has_previous_page=True, start_cursor="c3"))
    fetch_page = mocker.Mock(return_value=next_page)
    result = PaginatedResult(
        ["a", "b"],
        PageInfo(has_next_page=True, start_cursor="c1", end_cursor="c2"),
        fetch_page,
    )

    assert result.has_next_page
    assert not result.has_previous_page
    assert result.previous_page() is None
    assert result.next_page() is next_page
    fetch_page.assert_called_once_with(after="c2")

    assert next_page.previous_page() is None


def test_paginated_result_previous_page(mocker):
    fetch_page = mocker.Mock(return_value=PaginatedResult([], PageInfo()))
    result = PaginatedResult(
        ["b"],
        PageInfo(has_previous_page=True, start_cursor="c1", end_cursor="c1"),
        fetch_page,
    )

    result.previous_page()

    fetch_page.assert_called_once_with(before="c1")


def test_paginated_result_all_records(mocker):
    last = PaginatedResult(["e"], PageInfo(end_cursor="c5"))
    middle = PaginatedResult(
        ["c", "d"],
        PageInfo(has_next_page=True, end_cursor="c4"),
        mocker.Mock(return_value=last),
    )
    first = PaginatedResult(
        ["a", "b"],
        PageInfo(has_next_page=True, end_cursor="c2"),
        mocker.Mock(return_value=middle),
    )

    assert first.all_records() == ["a", "b", "c", "d", "e"]
