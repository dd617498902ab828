from __future__ import annotations

import pytest

from stubforge.naming import pluralize, snake_case, split_words, studly_case


@pytest.mark.parametrize(
    "value, expected",
    [
        ("product", "Product"),
        ("Product", "Product"),
        ("product category", "ProductCategory"),
        ("   product    category  ", "ProductCategory"),
        ("ProductCategory", "ProductCategory"),
        ("blog_post", "BlogPost"),
        ("order-item", "OrderItem"),
        ("---", ""),
    ],
)
def test_studly_case(value, expected):
    assert studly_case(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        ("Product", "Products"),
        ("Category", "Categories"),
        ("ProductCategory", "ProductCategories"),
        ("Day", "Days"),
        ("Box", "Boxes"),
        ("Status", "Statuses"),
        ("Branch", "Branches"),
        ("Person", "People"),
        ("SalesPerson", "SalesPeople"),
        ("Child", "Children"),
        ("Leaf", "Leaves"),
        ("Knife", "Knives"),
        ("Data", "Data"),
        ("Feedback", "Feedback"),
        ("", ""),
    ],
)
def test_pluralize(value, expected):
    assert pluralize(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        ("ProductCategories", "product_categories"),
        ("OrderItem", "order_item"),
        ("HTTPRequest", "http_request"),
        ("blog post", "blog_post"),
    ],
)
def test_snake_case(value, expected):
    assert snake_case(value) == expected


def test_split_words_drops_punctuation():
    assert split_words("Product! Category?") == ["Product", "Category"]
