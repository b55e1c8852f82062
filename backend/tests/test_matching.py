import pytest

from models import BloodGroup, DonorCreate

pytestmark = pytest.mark.anyio


async def add_donor(ctx, blood_group, location, name="Donor"):
    return await ctx.donors.create(DonorCreate(
        name=name, age=30, blood_group=blood_group, phone="9000000000", location=location
    ))


async def test_matches_group_and_case_insensitive_city_substring(ctx):
    central = await add_donor(ctx, "O+", "Mumbai Central", name="Central")
    await add_donor(ctx, "O+", "Pune", name="Pune")
    await add_donor(ctx, "A+", "Mumbai", name="Wrong group")

    matches = await ctx.matcher.find_matching_donors(BloodGroup.O_POSITIVE, "mumbai")

    assert [d.id for d in matches] == [central.id]


async def test_result_size_capped_at_limit(ctx):
    for i in range(8):
        await add_donor(ctx, "B-", f"Andheri East, Mumbai {i}")

    assert len(await ctx.matcher.find_matching_donors("B-", "Mumbai")) == 5
    assert len(await ctx.matcher.find_matching_donors("B-", "Mumbai", limit=2)) == 2


async def test_city_is_matched_literally(ctx):
    literal = await add_donor(ctx, "AB-", "St. Louis (North) ward")
    await add_donor(ctx, "AB-", "StX Louis North")

    matches = await ctx.matcher.find_matching_donors("AB-", "st. louis (north)")

    assert [d.id for d in matches] == [literal.id]


async def test_no_matches_returns_empty_list(ctx):
    await add_donor(ctx, "O-", "Chennai")

    assert await ctx.matcher.find_matching_donors("O-", "Delhi") == []
    assert await ctx.matcher.find_matching_donors("O-", "   ") == []
