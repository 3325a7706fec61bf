from __future__ import annotations

PROJECTS_QUERY = """*[
  _type == "project"
  && defined(slug.current)
]|order(publishedAt desc){
  _id,
  title,
  slug,
  description,
  category,
  publishedAt,
  featured,
  featuredImage
}"""

PROJECT_QUERY = '*[_type == "project" && slug.current == $slug][0]'

PAGE_QUERY = '*[_type == "page" && slug.current == $slug][0]'
