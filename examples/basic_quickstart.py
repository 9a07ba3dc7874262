from dataclasses import dataclass, field
from typing import List

from drakonis import AccessControl, PolicyAssembler


@dataclass
class User:
    id: str
    roles: List[str] = field(default_factory=list)


@dataclass
class Article:
    id: str
    author_id: str


def main() -> None:
    policy = (
        PolicyAssembler()
        .for_role("admin")
        .on_resource("article")
        .declare_actions({"create": True, "delete": True})
        .for_role("author")
        .on_resource("article")
        .declare_actions(
            {
                "create": True,
                "delete": lambda user, article: article is not None and user.id == article.author_id,
            }
        )
        .finalize()
    )
    acl = AccessControl(policy)

    article = Article(id="a1", author_id="2")
    print(acl.is_allowed(User("1", ["admin"]), "article", "delete", article))  # True
    d = acl.evaluate(User("1", ["author"]), "article", "delete", article)
    print(d.allowed, d.reason)  # False, "denied"


if __name__ == "__main__":
    main()
