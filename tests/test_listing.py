import pytest

from solosphere.fields import parse_datetime


@pytest.fixture
def catalogue(add_job):
    add_job(title='Logo Design', category='Graphics Design', deadline='2030-03-01')
    add_job(title='Build a REST API', category='Web Development', deadline='2030-01-15')
    add_job(title='UI DESIGN for dashboard', category='Web Development', deadline='2030-02-10')
    add_job(title='Marketing copy', category='Digital Marketing', deadline='2030-04-20')
    add_job(title='Redesign checkout', category='Web Development', deadline='2030-01-01')


def titles(response):
    return [job['title'] for job in response.get_json()]


def test_search_is_case_insensitive_substring(client, catalogue):
    response = client.get('/all-jobs', query_string={'search': 'design'})

    found = titles(response)
    assert sorted(found) == ['Logo Design', 'Redesign checkout', 'UI DESIGN for dashboard']
    assert all('design' in title.lower() for title in found)


def test_empty_search_returns_everything(client, catalogue):
    assert len(client.get('/all-jobs', query_string={'search': ''}).get_json()) == 5


def test_search_treats_wildcards_literally(client, add_job):
    add_job(title='100% remote')
    add_job(title='Fully remote')

    response = client.get('/all-jobs', query_string={'search': '%'})

    assert titles(response) == ['100% remote']


def test_category_filter(client, catalogue):
    response = client.get('/all-jobs', query_string={'filter': 'Web Development'})

    assert len(response.get_json()) == 3
    assert {job['category'] for job in response.get_json()} == {'Web Development'}


def test_filter_and_search_combine(client, catalogue):
    response = client.get('/all-jobs', query_string={'filter': 'Web Development', 'search': 'design'})
    assert sorted(titles(response)) == ['Redesign checkout', 'UI DESIGN for dashboard']


def test_sort_ascending_by_deadline(client, catalogue):
    jobs = client.get('/all-jobs', query_string={'sort': 'asc'}).get_json()

    deadlines = [parse_datetime(job['deadline']) for job in jobs]
    assert deadlines == sorted(deadlines)


def test_sort_descending_by_deadline(client, catalogue):
    jobs = client.get('/all-jobs', query_string={'sort': 'dsc'}).get_json()

    deadlines = [parse_datetime(job['deadline']) for job in jobs]
    assert deadlines == sorted(deadlines, reverse=True)


def test_pagination(client, catalogue):
    first = client.get('/all-jobs', query_string={'sort': 'asc', 'page': 1, 'size': 2})
    second = client.get('/all-jobs', query_string={'sort': 'asc', 'page': 2, 'size': 2})
    third = client.get('/all-jobs', query_string={'sort': 'asc', 'page': 3, 'size': 2})

    assert titles(first) == ['Redesign checkout', 'Build a REST API']
    assert titles(second) == ['UI DESIGN for dashboard', 'Logo Design']
    assert titles(third) == ['Marketing copy']


def test_page_past_the_end_is_empty(client, catalogue):
    assert client.get('/all-jobs', query_string={'page': 9, 'size': 2}).get_json() == []


@pytest.mark.parametrize('params', [{'page': 0, 'size': 2}, {'page': 1, 'size': 'x'}, {'size': -1}])
def test_bad_pagination_is_rejected(client, params):
    assert client.get('/all-jobs', query_string=params).status_code == 400


def test_count_matches_filter(client, catalogue):
    assert client.get('/jobs-count').get_json() == {'count': 5}
    assert client.get('/jobs-count', query_string={'search': 'design'}).get_json() == {'count': 3}
    assert client.get(
        '/jobs-count', query_string={'filter': 'Web Development', 'search': 'design'}
    ).get_json() == {'count': 2}


def test_count_ignores_pagination(client, catalogue):
    response = client.get('/jobs-count', query_string={'filter': 'Web Development', 'page': 2, 'size': 1})
    assert response.get_json() == {'count': 3}
